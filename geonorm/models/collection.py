"""Ordered, read-only result set returned by provider queries."""

from collections.abc import Iterable, Iterator, Sequence

from geonorm.core.exceptions import CollectionIsEmpty, OutOfBounds
from geonorm.models.address import CanonicalAddress


class AddressCollection(Sequence[CanonicalAddress]):
    """Addresses in the order the provider returned them."""

    def __init__(self, addresses: Iterable[CanonicalAddress] = ()):
        self._addresses: tuple[CanonicalAddress, ...] = tuple(addresses)

    def __getitem__(self, index):  # type: ignore[override]
        if isinstance(index, slice):
            return AddressCollection(self._addresses[index])
        return self._addresses[index]

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self) -> Iterator[CanonicalAddress]:
        return iter(self._addresses)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AddressCollection):
            return self._addresses == other._addresses
        return NotImplemented

    def __repr__(self) -> str:
        return f"AddressCollection({list(self._addresses)!r})"

    def first(self) -> CanonicalAddress:
        """Return the first address.

        Raises:
            CollectionIsEmpty: If the collection holds no address
        """
        if not self._addresses:
            raise CollectionIsEmpty("The AddressCollection instance is empty.")
        return self._addresses[0]

    def is_empty(self) -> bool:
        return not self._addresses

    def has(self, index: int) -> bool:
        return 0 <= index < len(self._addresses)

    def get(self, index: int) -> CanonicalAddress:
        """Return the address at ``index``.

        Raises:
            OutOfBounds: If ``index`` is negative or past the end
        """
        if not self.has(index):
            raise OutOfBounds(f"Index {index} is out of bounds.")
        return self._addresses[index]

    def slice(self, offset: int, length: int | None = None) -> "AddressCollection":
        end = None if length is None else offset + length
        return AddressCollection(self._addresses[offset:end])

    def all(self) -> list[CanonicalAddress]:
        return list(self._addresses)
