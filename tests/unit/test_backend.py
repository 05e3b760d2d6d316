"""Tests for client library discovery."""

from unittest.mock import Mock, patch

import pytest

from anylist_cli.core import backend
from anylist_cli.core.backend import ENTRY_POINT_GROUP, load_client_factory
from anylist_cli.core.errors import ClientUnavailableError


def _entry_point(name, target):
    entry_point = Mock()
    entry_point.name = name
    entry_point.load.return_value = target
    return entry_point


class TestLoadClientFactory:
    """Test cases for load_client_factory."""

    def test_import_path(self):
        factory = load_client_factory("collections:OrderedDict")
        from collections import OrderedDict
        assert factory is OrderedDict

    def test_dotted_attribute(self):
        factory = load_client_factory("pathlib:Path.home")
        from pathlib import Path
        assert factory == Path.home

    def test_missing_module(self):
        with pytest.raises(ClientUnavailableError, match="Cannot import"):
            load_client_factory("no_such_anylist_module:Client")

    def test_missing_attribute(self):
        with pytest.raises(ClientUnavailableError, match="no attribute"):
            load_client_factory("collections:NoSuchClient")

    def test_not_callable(self):
        with pytest.raises(ClientUnavailableError, match="not callable"):
            load_client_factory("string:ascii_letters")

    def test_entry_point(self):
        sentinel = Mock()
        with patch.object(backend, "entry_points", return_value=[_entry_point("anylist", sentinel)]) as eps:
            assert load_client_factory() is sentinel
        eps.assert_called_once_with(group=ENTRY_POINT_GROUP)

    def test_entry_point_first_by_name(self):
        first, second = Mock(), Mock()
        candidates = [_entry_point("zeta", second), _entry_point("alpha", first)]
        with patch.object(backend, "entry_points", return_value=candidates):
            assert load_client_factory() is first

    def test_no_entry_points(self):
        with patch.object(backend, "entry_points", return_value=[]):
            with pytest.raises(ClientUnavailableError) as exc_info:
                load_client_factory()
        assert exc_info.value.exit_code == 1
        assert exc_info.value.hints

    def test_entry_point_import_error(self):
        broken = _entry_point("broken", None)
        broken.load.side_effect = ImportError("missing dependency")
        with patch.object(backend, "entry_points", return_value=[broken]):
            with pytest.raises(ClientUnavailableError, match="missing dependency"):
                load_client_factory()
