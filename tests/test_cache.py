# =============================================================================
# tests/test_cache.py - Cache Backend and Decorator Tests
# =============================================================================
# Tests for:
# - MemoryCache expiry and prefix deletion
# - RedisCache against a mocked redis client
# - cacheable / cache_put / cache_evict decorators
# - Cache failures never failing the decorated call
# =============================================================================

from unittest.mock import MagicMock, patch

from pydantic import BaseModel

from lib.cache import (
    KEY_PREFIX,
    MemoryCache,
    RedisCache,
    build_key,
    cache_evict,
    cache_prefix,
    cache_put,
    cacheable,
    evict,
    get_cache,
)


class Widget(BaseModel):
    id: int
    name: str


class WidgetService:
    """Small service used to exercise the decorators."""

    def __init__(self):
        self.store = {1: Widget(id=1, name="spanner")}
        self.loads = 0

    @cacheable("widgets", model=Widget, key=lambda self, widget_id: widget_id)
    def get(self, widget_id: int) -> Widget | None:
        self.loads += 1
        return self.store.get(widget_id)

    @cacheable("widget_lists", model=list[Widget])
    def find_all(self, name: str | None = None) -> list[Widget]:
        self.loads += 1
        return [w for w in self.store.values() if name is None or w.name == name]

    @cache_put("widgets", model=Widget, key=lambda self, widget: widget.id)
    def save(self, widget: Widget) -> Widget:
        self.store[widget.id] = widget
        return widget

    @cache_evict("widgets", key=lambda self, widget_id: widget_id)
    def remove(self, widget_id: int) -> None:
        del self.store[widget_id]


# =============================================================================
# Backends
# =============================================================================

class TestMemoryCache:
    """Tests for the in-process backend."""

    def test_set_and_get(self):
        cache = MemoryCache()

        cache.set("k", '{"a": 1}', ttl=60)

        assert cache.get("k") == '{"a": 1}'
        assert len(cache) == 1

    def test_expired_entry_is_a_miss(self):
        cache = MemoryCache()

        with patch("lib.cache.time.monotonic", return_value=1000.0):
            cache.set("k", "v", ttl=10)
        with patch("lib.cache.time.monotonic", return_value=1011.0):
            assert cache.get("k") is None

        assert len(cache) == 0

    def test_delete(self):
        cache = MemoryCache()
        cache.set("k", "v", ttl=60)

        assert cache.delete("k") is True
        assert cache.delete("k") is False

    def test_delete_prefix(self):
        cache = MemoryCache()
        cache.set("books::1", "a", ttl=60)
        cache.set("books::2", "b", ttl=60)
        cache.set("book_lists::x", "c", ttl=60)

        assert cache.delete_prefix("books::") == 2
        assert cache.get("book_lists::x") == "c"

    def test_clear_only_touches_own_keys(self):
        cache = MemoryCache()
        cache.set(f"{KEY_PREFIX}books::1", "a", ttl=60)
        cache.set("someone-else", "b", ttl=60)

        assert cache.clear() == 1
        assert cache.get("someone-else") == "b"


class TestRedisCache:
    """RedisCache with a mocked client."""

    def test_set_uses_setex(self):
        client = MagicMock()

        RedisCache(client=client).set("k", "v", ttl=30)

        client.setex.assert_called_once_with("k", 30, "v")

    def test_get_decodes_bytes(self):
        client = MagicMock()
        client.get.return_value = b'{"id": 1}'

        assert RedisCache(client=client).get("k") == '{"id": 1}'

    def test_delete_prefix_scans_keys(self):
        client = MagicMock()
        client.scan_iter.return_value = iter(["p::1", "p::2"])
        client.delete.return_value = 2

        removed = RedisCache(client=client).delete_prefix("p::")

        assert removed == 2
        client.scan_iter.assert_called_once_with(match="p::*")
        client.delete.assert_called_once_with("p::1", "p::2")

    def test_delete_prefix_no_keys(self):
        client = MagicMock()
        client.scan_iter.return_value = iter([])

        assert RedisCache(client=client).delete_prefix("p::") == 0
        client.delete.assert_not_called()

    def test_ping(self):
        client = MagicMock()
        client.ping.return_value = True

        assert RedisCache(client=client).ping() is True


# =============================================================================
# Keys
# =============================================================================

class TestBuildKey:
    """Key generation."""

    def test_key_function(self):
        key = build_key("books", lambda self, book_id: book_id, (object(), 7), {})

        assert key == f"{KEY_PREFIX}books::7"

    def test_default_key_skips_self(self):
        key = build_key("books", None, (object(), 2), {"size": 10})

        assert key == f"{KEY_PREFIX}books::2,size=10"

    def test_no_arguments(self):
        assert build_key("books", None, (object(),), {}) == f"{cache_prefix('books')}SimpleKey.EMPTY"


# =============================================================================
# Decorators
# =============================================================================

class TestDecorators:
    """Decorator behaviour against the shared (memory) cache."""

    def test_cacheable_hits_after_first_call(self):
        service = WidgetService()

        first = service.get(1)
        second = service.get(1)

        assert first == second == Widget(id=1, name="spanner")
        assert service.loads == 1

    def test_cacheable_skips_none(self):
        service = WidgetService()

        assert service.get(99) is None
        assert service.get(99) is None
        assert service.loads == 2

    def test_cacheable_list_model(self):
        service = WidgetService()

        service.find_all()
        cached = service.find_all()

        assert cached == [Widget(id=1, name="spanner")]
        assert service.loads == 1

    def test_cache_put_refreshes_entry(self):
        service = WidgetService()
        service.get(1)

        service.save(Widget(id=1, name="wrench"))

        assert service.get(1).name == "wrench"
        assert service.loads == 1

    def test_cache_evict(self):
        service = WidgetService()
        service.get(1)

        service.remove(1)

        assert service.get(1) is None
        assert service.loads == 2

    def test_evict_whole_cache(self):
        service = WidgetService()
        service.find_all()
        service.find_all(name="spanner")

        assert evict("widget_lists") == 2

    def test_read_failure_falls_through(self):
        service = WidgetService()
        broken = MagicMock()
        broken.get.side_effect = ConnectionError("cache down")
        broken.set.side_effect = ConnectionError("cache down")

        with patch("lib.cache.get_cache", return_value=broken):
            assert service.get(1).name == "spanner"
            assert service.get(1).name == "spanner"

        assert service.loads == 2

    def test_evict_failure_is_ignored(self):
        service = WidgetService()
        broken = MagicMock()
        broken.delete.side_effect = ConnectionError("cache down")

        with patch("lib.cache.get_cache", return_value=broken):
            service.remove(1)

        assert 1 not in service.store


def test_default_backend_is_memory():
    assert isinstance(get_cache(), MemoryCache)
