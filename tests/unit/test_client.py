"""
Tests for the AnyList client adapter.
"""

import pytest

from conftest import FakeFactory, FakeItem, FakeList

from anylist_cli.config.credentials import Credentials
from anylist_cli.core.client import (
    Session,
    add_item,
    check_item,
    clear_checked,
    find_item,
    find_list,
    get_items,
    get_lists,
    remove_item,
    uncheck_item,
    update_item_details,
)
from anylist_cli.core.errors import AuthenticationError
from anylist_cli.core.types import ItemInfo, ListInfo

CREDENTIALS = Credentials(email="me@example.com", password="secret")


class TestSession:
    """Test session lifetime handling."""

    @pytest.mark.asyncio
    async def test_login_and_teardown(self, fake_factory):
        async with Session(fake_factory, CREDENTIALS) as client:
            assert client.logged_in
            assert client.email == "me@example.com"
            assert client.password == "secret"
            assert not client.torn_down

        assert client.torn_down

    @pytest.mark.asyncio
    async def test_teardown_on_error(self, fake_factory):
        with pytest.raises(ValueError):
            async with Session(fake_factory, CREDENTIALS):
                raise ValueError("boom")

        assert fake_factory.clients[0].torn_down

    @pytest.mark.asyncio
    async def test_login_failure(self):
        factory = FakeFactory([], fail_login=True)

        with pytest.raises(AuthenticationError) as exc_info:
            async with Session(factory, CREDENTIALS):
                pytest.fail("body should not run")

        assert "Invalid credentials" in str(exc_info.value)
        assert exc_info.value.exit_code == 3
        assert factory.clients[0].torn_down

    def test_client_before_open(self, fake_factory):
        with pytest.raises(RuntimeError):
            Session(fake_factory, CREDENTIALS).client


class TestLookups:
    """Test name lookups."""

    @pytest.mark.asyncio
    async def test_get_lists(self, fake_client):
        lists = await get_lists(fake_client)

        assert lists[0] == ListInfo(
            name="Groceries",
            identifier=lists[0].identifier,
            item_count=4,
            checked_count=2,
        )
        assert lists[1].name == "Hardware Store"
        assert lists[1].checked_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["Groceries", "groceries", "GROCERIES", "gRoCeRiEs"])
    async def test_find_list_any_case(self, fake_client, grocery_list, name):
        assert await find_list(fake_client, name) is grocery_list

    @pytest.mark.asyncio
    async def test_find_list_missing(self, fake_client):
        assert await find_list(fake_client, "Costco") is None

    @pytest.mark.parametrize("name", ["Milk", "milk", "MILK"])
    def test_find_item_any_case(self, grocery_list, name):
        assert find_item(grocery_list, name) is grocery_list.items[0]

    def test_find_item_prefers_exact_match(self):
        lst = FakeList("Mixed", [FakeItem("milk"), FakeItem("Milk")])
        assert find_item(lst, "Milk") is lst.items[1]
        assert find_item(lst, "MILK") is lst.items[0]

    def test_find_item_missing(self, grocery_list):
        assert find_item(grocery_list, "Butter") is None

    def test_get_items(self, grocery_list):
        items = get_items(grocery_list)

        assert [item.name for item in items] == ["Milk", "Bread", "Eggs", "Apples"]
        assert items[0] == ItemInfo(
            name="Milk",
            quantity="2 L",
            details="",
            checked=False,
            identifier=grocery_list.items[0].identifier,
            category_match_id="dairy",
        )
        assert items[1].quantity == ""
        assert items[1].category_match_id == "other"

    def test_get_items_unchecked_only(self, grocery_list):
        items = get_items(grocery_list, unchecked_only=True)
        assert [item.name for item in items] == ["Milk", "Bread"]


class TestMutations:
    """Test item mutations."""

    @pytest.mark.asyncio
    async def test_add_new_item(self, fake_client, grocery_list):
        info = await add_item(fake_client, grocery_list, "Butter", quantity="1", category_id="dairy", details="salted")

        added = grocery_list.items[-1]
        assert added.name == "Butter"
        assert info.quantity == "1"
        assert info.category_match_id == "dairy"
        assert info.details == "salted"
        assert info.checked is False

    @pytest.mark.asyncio
    async def test_add_new_item_minimal(self, fake_client, grocery_list):
        info = await add_item(fake_client, grocery_list, "Butter")

        assert grocery_list.items[-1].quantity is None
        assert info.quantity == ""
        assert info.category_match_id == "other"

    @pytest.mark.asyncio
    async def test_add_existing_unchecks(self, fake_client, grocery_list):
        eggs = grocery_list.items[2]

        info = await add_item(fake_client, grocery_list, "eggs")

        assert len(grocery_list.items) == 4
        assert eggs.checked is False
        assert eggs.save_count == 1
        assert info.name == "Eggs"
        assert info.quantity == "12"

    @pytest.mark.asyncio
    async def test_add_existing_updates_fields(self, fake_client, grocery_list):
        bread = grocery_list.items[1]

        await add_item(fake_client, grocery_list, "Bread", quantity="2", category_id="bakery-bread", details="rye")

        assert (bread.quantity, bread.category_match_id, bread.details) == ("2", "bakery-bread", "rye")
        assert bread.save_count == 1

    @pytest.mark.asyncio
    async def test_add_existing_unchanged_skips_save(self, fake_client, grocery_list):
        bread = grocery_list.items[1]
        await add_item(fake_client, grocery_list, "Bread")
        assert bread.save_count == 0

    @pytest.mark.asyncio
    async def test_check_and_uncheck(self, grocery_list):
        milk = grocery_list.items[0]

        info = await check_item(grocery_list, "MILK")
        assert info.checked is True
        assert milk.checked is True

        info = await uncheck_item(grocery_list, "milk")
        assert info.checked is False
        assert milk.checked is False
        assert milk.save_count == 2

    @pytest.mark.asyncio
    async def test_check_missing(self, grocery_list):
        assert await check_item(grocery_list, "Butter") is None
        assert await uncheck_item(grocery_list, "Butter") is None

    @pytest.mark.asyncio
    async def test_update_item_details(self, grocery_list):
        info = await update_item_details(grocery_list, "apples", "Gala")

        assert info.details == "Gala"
        assert grocery_list.items[3].save_count == 1
        assert await update_item_details(grocery_list, "Butter", "x") is None

    @pytest.mark.asyncio
    async def test_remove_item(self, grocery_list):
        assert await remove_item(grocery_list, "bread") is True
        assert [item.name for item in grocery_list.items] == ["Milk", "Eggs", "Apples"]
        assert await remove_item(grocery_list, "bread") is False

    @pytest.mark.asyncio
    async def test_clear_checked(self, grocery_list):
        count = await clear_checked(grocery_list)

        assert count == 2
        assert [item.name for item in grocery_list.removed] == ["Eggs", "Apples"]
        assert [item.name for item in grocery_list.items] == ["Milk", "Bread"]

    @pytest.mark.asyncio
    async def test_clear_checked_nothing(self, hardware_list):
        assert await clear_checked(hardware_list) == 0
