"""
Shared fixtures: an in-memory stand-in for the AnyList client library.
"""

from typing import List, Optional
import itertools

import pytest

_ids = itertools.count(1)


class FakeItem:
    """Item with the attributes and save() of a library item."""

    def __init__(
        self,
        name: str,
        quantity: Optional[str] = None,
        details: Optional[str] = None,
        checked: bool = False,
        category_match_id: Optional[str] = None,
    ):
        self.name = name
        self.quantity = quantity
        self.details = details
        self.checked = checked
        self.category_match_id = category_match_id
        self.identifier = f"item-{next(_ids)}"
        self.save_count = 0

    async def save(self) -> None:
        self.save_count += 1


class FakeList:
    """List whose get_item_by_name() is case-sensitive, like the library's."""

    def __init__(self, name: str, items: Optional[List[FakeItem]] = None):
        self.name = name
        self.identifier = f"list-{next(_ids)}"
        self.items = list(items or [])
        self.removed: List[FakeItem] = []

    async def add_item(self, item: FakeItem) -> FakeItem:
        self.items.append(item)
        return item

    async def remove_item(self, item: FakeItem) -> None:
        self.items.remove(item)
        self.removed.append(item)

    def get_item_by_name(self, name: str) -> Optional[FakeItem]:
        return next((item for item in self.items if item.name == name), None)


class FakeClient:
    """Client that serves a fixed set of lists."""

    def __init__(self, lists: List[FakeList], email: str = "", password: str = "", fail_login: bool = False):
        self.lists = lists
        self.email = email
        self.password = password
        self.fail_login = fail_login
        self.logged_in = False
        self.torn_down = False

    async def login(self) -> None:
        if self.fail_login:
            raise RuntimeError("Invalid credentials")
        self.logged_in = True

    def teardown(self) -> None:
        self.torn_down = True

    async def get_lists(self) -> List[FakeList]:
        return self.lists

    def get_list_by_name(self, name: str) -> Optional[FakeList]:
        return next((lst for lst in self.lists if lst.name == name), None)

    def create_item(self, **options) -> FakeItem:
        return FakeItem(**options)


class FakeFactory:
    """Records every client it builds."""

    def __init__(self, lists: List[FakeList], fail_login: bool = False):
        self.lists = lists
        self.fail_login = fail_login
        self.clients: List[FakeClient] = []

    def __call__(self, email: str, password: str) -> FakeClient:
        client = FakeClient(self.lists, email, password, fail_login=self.fail_login)
        self.clients.append(client)
        return client


@pytest.fixture
def grocery_list() -> FakeList:
    return FakeList("Groceries", [
        FakeItem("Milk", quantity="2 L", category_match_id="dairy"),
        FakeItem("Bread"),
        FakeItem("Eggs", quantity="12", checked=True),
        FakeItem("Apples", checked=True, details="Honeycrisp"),
    ])


@pytest.fixture
def hardware_list() -> FakeList:
    return FakeList("Hardware Store", [FakeItem("Screws")])


@pytest.fixture
def fake_factory(grocery_list, hardware_list) -> FakeFactory:
    return FakeFactory([grocery_list, hardware_list])


@pytest.fixture
def fake_client(fake_factory) -> FakeClient:
    return fake_factory(email="me@example.com", password="secret")


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Point all settings at a temporary directory and clear credential env vars."""
    monkeypatch.chdir(tmp_path)
    for var in ("ANYLIST_EMAIL", "ANYLIST_PASSWORD", "ANYLIST_CLIENT", "ANYLIST_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("ANYLIST_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("ANYLIST_LIBRARY_CREDENTIALS_FILE", str(tmp_path / ".anylist_credentials"))
    return tmp_path
