from logic.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = TTLCache(ttl=10, clock=clock)
    cache.set("a", 1)

    clock.now = 9.9
    assert cache.get("a") == 1
    clock.now = 10
    assert cache.get("a") is None
    assert len(cache) == 0


def test_per_entry_ttl_override():
    clock = FakeClock()
    cache = TTLCache(ttl=10, clock=clock)
    cache.set("short", "x", ttl=1)
    cache.set("long", "y")

    clock.now = 5
    assert cache.get("short") is None
    assert cache.get("long") == "y"


def test_clear_by_prefix():
    cache = TTLCache(ttl=60)
    cache.set("advanced:1", {})
    cache.set("advanced:2", {})
    cache.set("other", {})

    cache.clear("advanced:")
    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0


def test_set_sweeps_entries_never_read_again():
    clock = FakeClock()
    cache = TTLCache(ttl=10, clock=clock)
    cache.set("advanced:1", {})
    cache.set("advanced:2", {})

    clock.now = 11
    cache.set("advanced:3", {})

    assert len(cache) == 1
    assert cache.get("advanced:3") == {}
