"""JSON encoding for values stored in Redis.

Non-JSON types are wrapped in a tagged object, ``{"__uuid__": "..."}``
or ``{"__datetime__": "..."}``, and unwrapped on the way back. Pydantic
models are stored as ``{"__model__": "<ClassName>", "data": {...}}`` and
come back as the plain ``data`` dict; callers validate it into the model
they expect (see ``TenantResolver``).
"""

import json
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class CacheEncoder(json.JSONEncoder):
    def default(self, obj: Any) -> Any:
        if isinstance(obj, BaseModel):
            return {"__model__": type(obj).__name__, "data": obj.model_dump(mode="json")}
        if isinstance(obj, UUID):
            return {"__uuid__": str(obj)}
        if isinstance(obj, datetime):
            return {"__datetime__": obj.isoformat()}
        return super().default(obj)


def _decode(obj: dict[str, Any]) -> Any:
    if "__uuid__" in obj:
        return UUID(obj["__uuid__"])
    if "__datetime__" in obj:
        return datetime.fromisoformat(obj["__datetime__"])
    if "__model__" in obj:
        return obj["data"]
    return obj


def serialize(value: Any) -> str:
    """Encode a cache value as a JSON string.

    Raises:
        TypeError: The value holds a type the encoder does not know
    """
    return json.dumps(value, cls=CacheEncoder)


def deserialize(data: str) -> Any:
    return json.loads(data, object_hook=_decode)
