from typing import Annotated

from pydantic import Field, StringConstraints

from core.models.base import Command, Document, Number

CategoryName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=30)]
HexColor = Annotated[str, StringConstraints(pattern=r"^#[0-9A-Fa-f]{6}$")]
IconName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


class Category(Document):
    id: str
    trip_id: str
    name: str
    icon_name: str
    color: str
    sort_order: Number
    is_default: bool = False
    created_by: str
    created_at: int
    updated_at: int


class CategoryCreate(Command):
    name: CategoryName
    icon_name: IconName
    color: HexColor
    sort_order: Number | None = None


class CategoryUpdate(Command):
    name: CategoryName | None = None
    icon_name: IconName | None = None
    color: HexColor | None = None
    sort_order: Number | None = None


class CategoryReorder(Command):
    category_ids: list[str] = Field(..., min_length=1)
