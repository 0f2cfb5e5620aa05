"""Factory for organization (tenant) records."""

from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory

from storefront_api.core.tenancy import TenantRecord


class TenantRecordFactory(ModelFactory[TenantRecord]):
    """Factory for generating tenant snapshot test data."""

    __model__ = TenantRecord

    @classmethod
    def name(cls) -> str:
        """Generate a company name."""
        return f"{cls.__faker__.company()} {cls.__faker__.company_suffix()}"

    @classmethod
    def slug(cls) -> str:
        """Generate a normalized slug."""
        return f"{cls.__faker__.slug()}-{uuid4().hex[:6]}"

    @classmethod
    def logo(cls) -> str | None:
        return None
