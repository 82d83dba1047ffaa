"""Snapshot-keyed memoization for view derivations"""

import functools
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_UNSET = object()


class SnapshotMemo(Generic[T]):
    """
    Caches the result of a derivation for the last snapshot it saw.

    The key is the snapshot's identity, so a new poll result (a new object)
    always recomputes and an unchanged one always returns the same derived
    object. Pass ``key`` to use a content key instead where identity is not
    meaningful.
    """

    def __init__(self, derive: Callable[..., T], key: Optional[Callable[[Any], Any]] = None):
        self._derive = derive
        self._key = key
        self._last_key: Any = _UNSET
        self._last_result: Any = _UNSET
        functools.update_wrapper(self, derive)

    def _key_for(self, snapshot: Any) -> Any:
        if self._key is not None:
            return self._key(snapshot)
        return snapshot

    def _matches(self, key: Any) -> bool:
        if self._last_key is _UNSET:
            return False
        if self._key is not None:
            return self._last_key == key
        return self._last_key is key

    def __call__(self, snapshot: Any, *args, **kwargs) -> T:
        key = self._key_for(snapshot)
        if not self._matches(key):
            self._last_result = self._derive(snapshot, *args, **kwargs)
            self._last_key = key
        return self._last_result

    def clear(self) -> None:
        self._last_key = _UNSET
        self._last_result = _UNSET
