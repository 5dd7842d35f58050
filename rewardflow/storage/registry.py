"""Ordered, immutable collection of holders keyed by address.

Addresses are compared case-insensitively, so "ABC" and "abc" are the same
wallet.
"""

from collections.abc import Iterable, Iterator

from ..core.exceptions import DuplicateHolderError
from ..core.models import Holder


def _key(address: str) -> str:
    return address.strip().lower()


class HolderRegistry:
    """Holders of a single run, without duplicate addresses."""

    def __init__(self, holders: Iterable[Holder] = ()):
        self._holders: tuple[Holder, ...] = ()
        self._index: dict[str, Holder] = {}
        for holder in holders:
            self._append(holder)

    def _append(self, holder: Holder) -> None:
        key = _key(holder.address)
        existing = self._index.get(key)
        if existing is not None:
            raise DuplicateHolderError(holder.address, existing_address=existing.address)
        self._index[key] = holder
        self._holders = self._holders + (holder,)

    def add(self, holder: Holder) -> "HolderRegistry":
        """Return a new registry with the holder appended."""
        registry = HolderRegistry(self._holders)
        registry._append(holder)
        return registry

    def find(self, address: str) -> Holder | None:
        """Look up a holder by address."""
        return self._index.get(_key(address))

    @property
    def holders(self) -> tuple[Holder, ...]:
        return self._holders

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and _key(address) in self._index

    def __iter__(self) -> Iterator[Holder]:
        return iter(self._holders)

    def __len__(self) -> int:
        return len(self._holders)

    def __repr__(self) -> str:
        return f"HolderRegistry({len(self)} holders)"
