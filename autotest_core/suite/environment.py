"""
Deprecation channel injected into suites.

Suites never reach for a global environment object; the engine hands each
suite an object implementing ``Environment``. ``DeprecationLog`` is the
default implementation used when none is supplied.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Protocol, Set

from loguru import logger

if TYPE_CHECKING:
    from autotest_core.suite.suite import Suite


class Environment(Protocol):
    """Collaborator receiving deprecation warnings raised by suites."""

    def deprecated(self, message: str, ignore_runnable: bool = False) -> None:
        ...


@dataclass
class DeprecationEntry:
    message: str
    ignore_runnable: bool


class DeprecationLog:
    """
    Records deprecations, logs each distinct message once, and optionally
    attaches them to a top-level suite's deprecation warnings.
    """

    def __init__(self, top_suite: Optional["Suite"] = None):
        self.top_suite = top_suite
        self.entries: List[DeprecationEntry] = []
        self._seen: Set[str] = set()

    def deprecated(self, message: str, ignore_runnable: bool = False) -> None:
        self.entries.append(DeprecationEntry(message, ignore_runnable))

        if message not in self._seen:
            self._seen.add(message)
            logger.warning(f"DEPRECATION: {message}")

        if self.top_suite is not None:
            self.top_suite.add_deprecation_warning(message)

    @property
    def messages(self) -> List[str]:
        return [entry.message for entry in self.entries]


__all__ = ["Environment", "DeprecationEntry", "DeprecationLog"]
