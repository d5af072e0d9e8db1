"""Fixture context shared across a branch of the suite tree."""

from typing import Any, Dict, Iterator, Mapping, Optional


class UserContext:
    """
    Mutable key-value store handed to hooks and specs.

    Values are reachable both as items (``ctx["user"]``) and as attributes
    (``ctx.user``). A child suite never shares a context with its parent; it
    receives a copy made with ``from_existing``.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        object.__setattr__(self, "_values", dict(values or {}))

    @classmethod
    def from_existing(cls, other: "UserContext") -> "UserContext":
        """Return an independent copy of ``other``'s current top-level values."""
        return cls(other.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name == "_values":
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(
                f"'{type(self).__name__}' has no attribute '{name}'"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self._values[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._values[name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        del self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UserContext):
            return self._values == other._values
        return NotImplemented

    def __repr__(self) -> str:
        return f"UserContext({self._values!r})"
