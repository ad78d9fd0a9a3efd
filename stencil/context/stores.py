"""
Layered identifier stores.

A store maps identifier names to values. Two variants exist:

- FlatStore: backed by a single dict, owns its entries
- ScopeView: read-through composite of a base and an overlay store; reads
  prefer the overlay, writes always land in the overlay so the base is
  never mutated through the view
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .identifiers import check_identifiers


class Store(ABC):
    """Capability contract shared by all stores."""

    @abstractmethod
    def get_value(self, name: str) -> Tuple[Any, bool]:
        """
        Look up a name.

        Args:
            name: Identifier to resolve

        Returns:
            (value, True) when found, (None, False) otherwise
        """

    @abstractmethod
    def set_value(self, name: str, value: Any) -> None:
        """Store a value, silently overwriting any previous one."""

    @abstractmethod
    def list_identifiers(self) -> List[str]:
        """Return every name resolvable through this store."""

    def __contains__(self, name: object) -> bool:
        return self.get_value(name)[1]  # type: ignore[arg-type]


class FlatStore(Store):
    """Store backed directly by one dict."""

    def __init__(self, entries: Optional[Dict[str, Any]] = None):
        self._entries: Dict[str, Any] = entries if entries is not None else {}

    def get_value(self, name: str) -> Tuple[Any, bool]:
        if name in self._entries:
            return self._entries[name], True
        return None, False

    def set_value(self, name: str, value: Any) -> None:
        self._entries[name] = value

    def list_identifiers(self) -> List[str]:
        return list(self._entries.keys())

    def items(self):
        return self._entries.items()

    def to_dict(self) -> Dict[str, Any]:
        """Shallow copy of the entries."""
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._entries!r})"


class Context(FlatStore):
    """
    User-facing data store handed to a render.

    Constants, variables, objects and callables placed here become visible
    to the template through the Public scope, e.g. {{ user.name }}.
    """

    def update(self, other: Mapping[str, Any]) -> "Context":
        """
        Update this context with the key/value pairs from another mapping.

        Args:
            other: Mapping (or FlatStore) whose entries win on conflicts

        Returns:
            This context, for chaining
        """
        for key, value in other.items():
            self._entries[key] = value
        return self

    def update_checked(self, other: Mapping[str, Any]) -> "Context":
        """
        Like update(), but reject the mapping if any key is not a valid identifier.

        Raises:
            ValidationError: For the first invalid key found
        """
        error = check_identifiers([key for key, _ in other.items()])
        if error is not None:
            raise error
        return self.update(other)


class ScopeView(Store):
    """
    Read-through composite of two stores.

    Holds references to base and overlay without owning them. Reads try the
    overlay first and fall back to the base; writes always go to the overlay.

    Views stacked through their base (one per nested scope) are walked
    iteratively, so chain length is not limited by the interpreter stack.
    """

    def __init__(self, base: Store, overlay: Store):
        self.base = base
        self.overlay = overlay

    def get_value(self, name: str) -> Tuple[Any, bool]:
        store: Store = self
        while isinstance(store, ScopeView):
            value, found = store.overlay.get_value(name)
            if found:
                return value, True
            store = store.base
        return store.get_value(name)

    def set_value(self, name: str, value: Any) -> None:
        self.overlay.set_value(name, value)

    def list_identifiers(self) -> List[str]:
        # Base names first, then each overlay from the bottom up; names
        # present on several layers are listed once per layer
        overlays = []
        store: Store = self
        while isinstance(store, ScopeView):
            overlays.append(store.overlay)
            store = store.base

        identifiers = list(store.list_identifiers())
        for overlay in reversed(overlays):
            identifiers.extend(overlay.list_identifiers())
        return identifiers

    @property
    def depth(self) -> int:
        """Number of ScopeView layers between this view and its root base."""
        depth = 0
        store: Store = self
        while isinstance(store, ScopeView):
            depth += 1
            store = store.base
        return depth

    def __repr__(self) -> str:
        return f"ScopeView(depth={self.depth}, overlay={self.overlay!r})"


def merge_stores(base: Store, overlay: Store) -> ScopeView:
    """Compose two stores into a read-through view."""
    return ScopeView(base, overlay)


def as_store(data: Any) -> Store:
    """
    Coerce user data into a Store.

    Args:
        data: A Store, a dict-like mapping, or None

    Returns:
        The store itself, or a FlatStore referencing the mapping
    """
    if data is None:
        return Context()
    if isinstance(data, Store):
        return data
    if isinstance(data, dict):
        return Context(data)
    if isinstance(data, Mapping):
        return Context(dict(data))
    raise TypeError(f"Cannot use {type(data).__name__} as a context store")


def unique_identifiers(store: Store) -> List[str]:
    """
    List a store's identifiers without duplicates, in first-seen order.

    Composed stores report shadowed names once per layer; this collapses
    them for consumers that need each name once.
    """
    seen = set()
    result = []
    for name in store.list_identifiers():
        if name not in seen:
            seen.add(name)
            result.append(name)
    return result
