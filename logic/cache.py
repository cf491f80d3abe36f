import time


class TTLCache:
    """In-process key/value cache with per-entry expiry.

    Expired entries are dropped when read, and every `set` sweeps the rest.
    """

    def __init__(self, ttl, clock=time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self._entries = {}

    def get(self, key):
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self.clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key, value, ttl=None):
        now = self.clock()
        self.prune(now)
        self._entries[key] = (now + (self.ttl if ttl is None else ttl), value)

    def prune(self, now=None):
        now = self.clock() if now is None else now
        for key in [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]:
            del self._entries[key]

    def clear(self, prefix=None):
        if prefix is None:
            self._entries.clear()
            return
        for key in [k for k in self._entries if k.startswith(prefix)]:
            del self._entries[key]

    def __len__(self):
        return len(self._entries)
