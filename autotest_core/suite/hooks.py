"""
================================================================================
Hook Lists
================================================================================

Ordered storage for the before/after hooks registered on a suite.

Each list has an explicit ordering discipline:
    - QUEUE: hooks run in declaration order (beforeAll)
    - STACK: the most recently declared hook runs first (afterAll,
      beforeEach, afterEach)

Iterating a HookList always yields hooks in run order.

================================================================================
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Union


class HookOrder(str, Enum):
    """Insertion discipline of a hook list."""
    QUEUE = "queue"
    STACK = "stack"


@dataclass
class Hook:
    """
    A registered hook slot.

    ``fn`` is cleared by cleanup once the suite has finished running; the slot
    itself stays so that hook counts remain stable for reporting.
    """
    fn: Optional[Callable[..., Any]]
    name: Optional[str] = None
    timeout: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_inert(self) -> bool:
        return self.fn is None

    @classmethod
    def wrap(cls, fn: Union["Hook", Callable[..., Any]]) -> "Hook":
        if isinstance(fn, Hook):
            return fn
        return cls(fn=fn, name=getattr(fn, "__name__", None))


class HookList:
    """Hooks of one kind for one suite, kept in run order."""

    def __init__(self, order: HookOrder):
        self.order = order
        self._hooks: List[Hook] = []

    def add(self, fn: Union[Hook, Callable[..., Any]]) -> Hook:
        """
        Register a hook according to this list's discipline.

        Args:
            fn: A callable or an already-built Hook

        Returns:
            The stored Hook
        """
        hook = Hook.wrap(fn)
        if self.order is HookOrder.QUEUE:
            self._hooks.append(hook)
        else:
            self._hooks.insert(0, hook)
        return hook

    def clear_fns(self) -> None:
        """Drop every hook's function reference, keeping the slots."""
        for hook in self._hooks:
            hook.fn = None

    def __len__(self) -> int:
        return len(self._hooks)

    def __iter__(self) -> Iterator[Hook]:
        return iter(self._hooks)

    def __getitem__(self, index: int) -> Hook:
        return self._hooks[index]

    def __repr__(self) -> str:
        return f"HookList(order={self.order.value}, hooks={len(self._hooks)})"


__all__ = ["Hook", "HookList", "HookOrder"]
