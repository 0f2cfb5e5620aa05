"""Test doubles shared across the suite."""

from storefront_api.core.tenancy import TenantRecord


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeOrganizationStore:
    """In-memory stand-in for the organization table.

    Records every slug it is queried with so tests can count store hits.
    Set ``error`` to make lookups fail.
    """

    def __init__(self, *records: TenantRecord) -> None:
        self.records = {record.slug: record for record in records}
        self.queries: list[str] = []
        self.error: Exception | None = None

    def add(self, record: TenantRecord) -> TenantRecord:
        self.records[record.slug] = record
        return record

    async def __call__(self, slug: str) -> TenantRecord | None:
        self.queries.append(slug)
        if self.error is not None:
            raise self.error
        return self.records.get(slug)
