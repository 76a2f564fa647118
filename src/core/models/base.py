from time import time
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Number = int | float


def now_ms() -> int:
    """Epoch milliseconds, the timestamp unit of every stored document."""
    return int(time() * 1000)


class Document(BaseModel):
    """A stored row. Attributes are camelCase in storage and on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_item(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Command(BaseModel):
    """Request payload for a create or update mutation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def changes(self) -> dict[str, Any]:
        """Only the fields the caller supplied, keyed by stored attribute name."""
        return self.model_dump(by_alias=True, exclude_unset=True)
