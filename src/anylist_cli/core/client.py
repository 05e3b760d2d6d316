"""
AnyList client adapter.

Thin async wrappers around the external client library: a scoped session
that logs in and tears down, plus name lookup and item mutation helpers
operating on an already-fetched list.
"""

from types import TracebackType
from typing import List, Optional, Type
import logging

from anylist_cli.config.credentials import Credentials
from anylist_cli.core.backend import ClientFactory
from anylist_cli.core.errors import AuthenticationError
from anylist_cli.core.types import (
    AnyListClient,
    AnyListItem,
    AnyListList,
    ItemInfo,
    ListInfo,
)

logger = logging.getLogger(__name__)


class Session:
    """One authenticated client for the lifetime of an ``async with`` block.

    Example:
        async with Session(factory, credentials) as client:
            lists = await get_lists(client)
    """

    def __init__(self, factory: ClientFactory, credentials: Credentials):
        self._factory = factory
        self._credentials = credentials
        self._client: Optional[AnyListClient] = None

    @property
    def client(self) -> AnyListClient:
        if self._client is None:
            raise RuntimeError("Session is not open")
        return self._client

    async def open(self) -> AnyListClient:
        """Construct the client and log in.

        Raises:
            AuthenticationError: If the library rejects the credentials
        """
        client = self._factory(
            email=self._credentials.email,
            password=self._credentials.password,
        )
        self._client = client
        try:
            await client.login()
        except Exception as e:
            self.close()
            raise AuthenticationError(
                f"Authentication failed: {e}",
                original_error=e,
            ) from e
        logger.debug(f"Logged in as {self._credentials.email}")
        return client

    def close(self) -> None:
        """Tear down the client connection. Safe to call twice."""
        client, self._client = self._client, None
        if client is not None:
            client.teardown()
            logger.debug("Client torn down")

    async def __aenter__(self) -> AnyListClient:
        return await self.open()

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()


def _match_by_name(candidates, name: str):
    lower_name = name.lower()
    for candidate in candidates:
        if candidate.name.lower() == lower_name:
            return candidate
    return None


async def get_lists(client: AnyListClient) -> List[ListInfo]:
    """Get summaries of all lists."""
    lists = await client.get_lists()
    return [
        ListInfo(
            name=lst.name,
            identifier=lst.identifier,
            item_count=len(lst.items),
            checked_count=sum(1 for item in lst.items if item.checked),
        )
        for lst in lists
    ]


async def find_list(client: AnyListClient, name: str) -> Optional[AnyListList]:
    """Get a list by name, exact match first, then ignoring case."""
    lists = await client.get_lists()

    exact = client.get_list_by_name(name)
    if exact is not None:
        return exact

    return _match_by_name(lists, name)


def get_items(lst: AnyListList, unchecked_only: bool = False) -> List[ItemInfo]:
    """Snapshot the items of a list."""
    items = lst.items
    if unchecked_only:
        items = [item for item in items if not item.checked]
    return [ItemInfo.from_item(item) for item in items]


def find_item(lst: AnyListList, name: str) -> Optional[AnyListItem]:
    """Find an item by name, exact match first, then ignoring case."""
    exact = lst.get_item_by_name(name)
    if exact is not None:
        return exact

    return _match_by_name(lst.items, name)


async def add_item(
    client: AnyListClient,
    lst: AnyListList,
    name: str,
    quantity: Optional[str] = None,
    category_id: Optional[str] = None,
    details: Optional[str] = None,
) -> ItemInfo:
    """Add an item to a list.

    An existing item with the same name is unchecked and updated in place
    instead of being duplicated.
    """
    existing = find_item(lst, name)
    if existing is not None:
        needs_save = False

        if existing.checked:
            existing.checked = False
            needs_save = True
        if quantity:
            existing.quantity = quantity
            needs_save = True
        if category_id:
            existing.category_match_id = category_id
            needs_save = True
        if details is not None:
            existing.details = details
            needs_save = True

        if needs_save:
            await existing.save()
            logger.info(f"Updated existing item '{existing.name}' in {lst.name}")

        return ItemInfo.from_item(existing)

    options = {"name": name}
    if quantity:
        options["quantity"] = quantity
    if details is not None:
        options["details"] = details
    if category_id:
        options["category_match_id"] = category_id

    item = client.create_item(**options)
    added = await lst.add_item(item)
    logger.info(f"Added '{name}' to {lst.name}")
    return ItemInfo.from_item(added)


async def _set_checked(lst: AnyListList, name: str, checked: bool) -> Optional[ItemInfo]:
    item = find_item(lst, name)
    if item is None:
        return None

    item.checked = checked
    await item.save()
    return ItemInfo.from_item(item)


async def check_item(lst: AnyListList, name: str) -> Optional[ItemInfo]:
    """Mark an item as checked."""
    return await _set_checked(lst, name, True)


async def uncheck_item(lst: AnyListList, name: str) -> Optional[ItemInfo]:
    """Mark an item as unchecked."""
    return await _set_checked(lst, name, False)


async def update_item_details(lst: AnyListList, name: str, details: str) -> Optional[ItemInfo]:
    """Replace an item's notes."""
    item = find_item(lst, name)
    if item is None:
        return None

    item.details = details
    await item.save()
    return ItemInfo.from_item(item)


async def remove_item(lst: AnyListList, name: str) -> bool:
    """Remove an item from a list. Returns False if it was not found."""
    item = find_item(lst, name)
    if item is None:
        return False

    await lst.remove_item(item)
    logger.info(f"Removed '{item.name}' from {lst.name}")
    return True


async def clear_checked(lst: AnyListList) -> int:
    """Remove all checked items from a list, one at a time."""
    checked_items = [item for item in lst.items if item.checked]

    count = 0
    for item in checked_items:
        await lst.remove_item(item)
        count += 1

    logger.info(f"Cleared {count} checked item(s) from {lst.name}")
    return count
