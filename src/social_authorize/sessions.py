from __future__ import annotations

from typing import Any, Callable, MutableMapping, Optional


class DictSession:
    """Session backed by any mutable mapping, e.g. ``request.session``."""

    def __init__(self, data: Optional[MutableMapping[str, Any]] = None) -> None:
        self._data = data if data is not None else {}

    def store(self, key: str, value: Any) -> None:
        self._data[key] = value

    def load(self, key: str) -> Any:
        return self._data.get(key)


class CallbackSession:
    """Session backed by a pair of ``store(key, value)`` / ``load(key)`` callables."""

    def __init__(self, store: Callable[[str, Any], None], load: Callable[[str], Any]) -> None:
        self._store = store
        self._load = load

    def store(self, key: str, value: Any) -> None:
        self._store(key, value)

    def load(self, key: str) -> Any:
        return self._load(key)
