"""
Type definitions for anylist-cli.

This module defines the structural protocols the external AnyList client
library must satisfy, the serializable snapshots used for output, the
category table and the process exit codes.
"""

from enum import IntEnum
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


@runtime_checkable
class AnyListItem(Protocol):
    """An item object owned by the external client library."""

    name: str
    quantity: Optional[str]
    details: Optional[str]
    checked: bool
    identifier: str
    category_match_id: Optional[str]

    async def save(self) -> None: ...


@runtime_checkable
class AnyListList(Protocol):
    """A list object owned by the external client library."""

    name: str
    identifier: str
    items: List[AnyListItem]

    async def add_item(self, item: AnyListItem) -> AnyListItem: ...

    async def remove_item(self, item: AnyListItem) -> None: ...

    def get_item_by_name(self, name: str) -> Optional[AnyListItem]: ...


@runtime_checkable
class AnyListClient(Protocol):
    """The authenticated client exposed by the external library."""

    async def login(self) -> None: ...

    def teardown(self) -> None: ...

    async def get_lists(self) -> List[AnyListList]: ...

    def get_list_by_name(self, name: str) -> Optional[AnyListList]: ...

    def create_item(self, **options: Any) -> AnyListItem: ...


class ListInfo(BaseModel):
    """Serializable summary of a list."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    identifier: str
    item_count: int = Field(alias="itemCount")
    checked_count: int = Field(alias="checkedCount")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ItemInfo(BaseModel):
    """Serializable snapshot of an item."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    quantity: str = ""
    details: str = ""
    checked: bool = False
    identifier: str
    category_match_id: str = Field(default="other", alias="categoryMatchId")

    @classmethod
    def from_item(cls, item: AnyListItem) -> "ItemInfo":
        """Snapshot a library item, normalising missing fields."""
        return cls(
            name=item.name,
            quantity=getattr(item, "quantity", None) or "",
            details=getattr(item, "details", None) or "",
            checked=bool(item.checked),
            identifier=item.identifier,
            category_match_id=getattr(item, "category_match_id", None) or "other",
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# Friendly category names mapped to AnyList's internal category IDs
ANYLIST_CATEGORIES: Dict[str, str] = {
    "produce": "produce",
    "meat": "meat-seafood",
    "seafood": "meat-seafood",
    "dairy": "dairy",
    "bakery": "bakery-bread",
    "bread": "bakery-bread",
    "frozen": "frozen",
    "canned": "canned-goods",
    "condiments": "condiments",
    "beverages": "beverages",
    "snacks": "snacks",
    "pasta": "pasta-rice",
    "rice": "pasta-rice",
    "cereal": "breakfast",
    "breakfast": "breakfast",
    "baking": "baking",
    "spices": "spices-seasonings",
    "seasonings": "spices-seasonings",
    "household": "household",
    "personal care": "personal-care",
    "other": "other",
}


def resolve_category(name: str) -> Optional[str]:
    """Return the category ID for a friendly name, ignoring case."""
    return ANYLIST_CATEGORIES.get(name.strip().lower())


class ExitCode(IntEnum):
    """Process exit codes."""
    SUCCESS = 0
    FAILURE = 1
    INVALID_USAGE = 2
    AUTH_FAILURE = 3
