"""
================================================================================
Suite Module
================================================================================

A Suite is one node of the test hierarchy. It keeps its children, its four
hook lists, its aggregated result and the fixture context shared with its
descendants. It never drives execution itself: the engine registers hooks and
children during declaration, then brackets execution with start_timer() and
end_timer() and reads get_result() once the node has finished.

Hook ordering within one suite:
    - before_all: declaration order
    - after_all, before_each, after_each: most recently declared first

Status precedence: pending > failed > passed.

================================================================================
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from loguru import logger

from autotest_core.common import get_bool_config
from autotest_core.suite.environment import DeprecationLog, Environment
from autotest_core.suite.errors import (
    ExceptionKind,
    ExpectationFailed,
    SuiteConfigurationError,
    exception_kind,
)
from autotest_core.suite.expectation_result import (
    ExpectationResult,
    build_expectation_result,
)
from autotest_core.suite.hooks import Hook, HookList, HookOrder
from autotest_core.suite.timer import Timer
from autotest_core.suite.user_context import UserContext


# Label attached to failures raised by the root suite. The root only ever runs
# beforeAll/afterAll style hooks, and every such failure carries this label.
GLOBAL_ERROR_TYPE = "afterAll"

STATUS_PENDING = "pending"
STATUS_FAILED = "failed"
STATUS_PASSED = "passed"

ExpectationFactory = Callable[[Any, "Suite"], Any]
ExpectationResultFactory = Callable[[Mapping[str, Any]], ExpectationResult]


@dataclass
class SuiteResult:
    """
    Aggregated outcome of a suite.

    Attributes:
        id: The unique id of the suite
        description: The description the suite was declared with
        full_name: Description including all non-root ancestors, refreshed by
            Suite.get_result()
        failed_expectations: Failures recorded on the suite itself
            (beforeAll/afterAll failures and uncaught errors)
        deprecation_warnings: Deprecations raised while the suite ran
        duration: Milliseconds spent running the suite, set by end_timer()
        properties: User-supplied properties, if any
        status: "passed", "failed" or "pending", set by Suite.get_result()
    """
    id: Any
    description: str
    full_name: str
    failed_expectations: List[ExpectationResult] = field(default_factory=list)
    deprecation_warnings: List[ExpectationResult] = field(default_factory=list)
    duration: Optional[float] = None
    properties: Optional[Dict[str, Any]] = None
    status: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the field names reporters bind to."""
        return {
            "id": self.id,
            "description": self.description,
            "fullName": self.full_name,
            "failedExpectations": [e.to_dict() for e in self.failed_expectations],
            "deprecationWarnings": [d.to_dict() for d in self.deprecation_warnings],
            "duration": self.duration,
            "properties": self.properties,
            "status": self.status,
        }


class Suite:
    """
    A named grouping node in the test tree.

    Example:
        root = Suite("suite0", "Top Suite")
        calc = Suite("suite1", "Calculator", parent_suite=root)
        add = Suite("suite2", "add", parent_suite=calc)

        add.get_full_name()   # "Calculator add"
        root.get_full_name()  # ""
    """

    def __init__(
        self,
        suite_id: Any,
        description: str,
        parent_suite: Optional["Suite"] = None,
        environment: Optional[Environment] = None,
        expectation_factory: Optional[ExpectationFactory] = None,
        async_expectation_factory: Optional[ExpectationFactory] = None,
        expectation_result_factory: Optional[ExpectationResultFactory] = None,
        throw_on_expectation_failure: Optional[bool] = None,
        timer: Optional[Timer] = None,
    ):
        """
        Initialize a suite node.

        Args:
            suite_id: Unique id within the tree, assigned by the engine
            description: Label supplied at declaration
            parent_suite: Parent node, or None for the root
            environment: Deprecation channel; a DeprecationLog by default
            expectation_factory: Builds expectations for expect()
            async_expectation_factory: Builds expectations for expect_async()
            expectation_result_factory: Normalizes expectation data into
                records; build_expectation_result by default
            throw_on_expectation_failure: Unwind the runnable on the first
                failed expectation. Read from configuration when None.
            timer: Elapsed-time source; a fresh Timer by default
        """
        self.id = suite_id
        self.description = description
        self._parent_ref = weakref.ref(parent_suite) if parent_suite is not None else None
        self.environment = environment if environment is not None else DeprecationLog()

        self.expectation_factory = expectation_factory
        self.async_expectation_factory = async_expectation_factory
        self.expectation_result_factory = expectation_result_factory or build_expectation_result

        if throw_on_expectation_failure is None:
            throw_on_expectation_failure = get_bool_config(
                "suite.throw_on_expectation_failure", False
            )
        self._throw_on_expectation_failure = bool(throw_on_expectation_failure)

        self.before_fns = HookList(HookOrder.STACK)
        self.after_fns = HookList(HookOrder.STACK)
        self.before_all_fns = HookList(HookOrder.QUEUE)
        self.after_all_fns = HookList(HookOrder.STACK)

        self.timer = timer or Timer()
        self.children: List[Any] = []
        self.marked_pending = False
        self.shared_context: Optional[UserContext] = None

        self.result = SuiteResult(
            id=self.id,
            description=self.description,
            full_name=self.get_full_name(),
        )

    # ============================================================
    # Identity & Naming
    # ============================================================

    @property
    def parent_suite(self) -> Optional["Suite"]:
        """The parent node, or None for the root. Held as a weak reference."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def throw_on_expectation_failure(self) -> bool:
        return self._throw_on_expectation_failure

    def get_full_name(self) -> str:
        """
        The description including all ancestors except the root.

        Recomputed on every call since the tree may still be changing.
        """
        parts: List[str] = []
        node: Optional[Suite] = self
        while node is not None:
            parent = node.parent_suite
            if parent is not None:
                parts.insert(0, node.description)
            node = parent
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"Suite(id={self.id!r}, description={self.description!r})"

    # ============================================================
    # Expectations
    # ============================================================

    def expect(self, actual: Any) -> Any:
        if self.expectation_factory is None:
            raise SuiteConfigurationError(
                "No expectation factory configured for suite",
                details={"suite_id": self.id},
            )
        return self.expectation_factory(actual, self)

    def expect_async(self, actual: Any) -> Any:
        if self.async_expectation_factory is None:
            raise SuiteConfigurationError(
                "No async expectation factory configured for suite",
                details={"suite_id": self.id},
            )
        return self.async_expectation_factory(actual, self)

    # ============================================================
    # Hook Registration
    # ============================================================

    def before_each(self, fn: Union[Hook, Callable[..., Any]]) -> Hook:
        return self.before_fns.add(fn)

    def before_all(self, fn: Union[Hook, Callable[..., Any]]) -> Hook:
        return self.before_all_fns.add(fn)

    def after_each(self, fn: Union[Hook, Callable[..., Any]]) -> Hook:
        return self.after_fns.add(fn)

    def after_all(self, fn: Union[Hook, Callable[..., Any]]) -> Hook:
        return self.after_all_fns.add(fn)

    def cleanup_before_after(self) -> None:
        """Clear every hook's function, keeping the slots and their counts."""
        for hooks in (self.before_all_fns, self.after_all_fns, self.before_fns, self.after_fns):
            hooks.clear_fns()
        logger.debug(f"Cleaned up hooks for suite {self.id}")

    # ============================================================
    # Tree & Timing
    # ============================================================

    def add_child(self, child: Any) -> None:
        self.children.append(child)

    def start_timer(self) -> None:
        self.timer.start()

    def end_timer(self) -> None:
        self.result.duration = self.timer.elapsed()

    # ============================================================
    # Status
    # ============================================================

    def pend(self) -> None:
        self.marked_pending = True
        logger.debug(f"Suite marked pending: {self.id}")

    def status(self) -> str:
        if self.marked_pending:
            return STATUS_PENDING
        if self.result.failed_expectations:
            return STATUS_FAILED
        return STATUS_PASSED

    def can_be_reentered(self) -> bool:
        """True when the suite has no beforeAll/afterAll hooks."""
        return len(self.before_all_fns) == 0 and len(self.after_all_fns) == 0

    def get_result(self) -> SuiteResult:
        self.result.full_name = self.get_full_name()
        self.result.status = self.status()
        return self.result

    def set_suite_property(self, key: str, value: Any) -> None:
        if self.result.properties is None:
            self.result.properties = {}
        self.result.properties[key] = value

    # ============================================================
    # Shared Fixture Context
    # ============================================================

    def shared_user_context(self) -> UserContext:
        """
        The fixture context of this suite, created on first access.

        A child starts from a copy of its parent's context as it is at that
        moment; the root starts empty.
        """
        if self.shared_context is None:
            parent = self.parent_suite
            if parent is not None:
                self.shared_context = parent.cloned_shared_user_context()
            else:
                self.shared_context = UserContext()
        return self.shared_context

    def cloned_shared_user_context(self) -> UserContext:
        return UserContext.from_existing(self.shared_user_context())

    # ============================================================
    # Failure Recording
    # ============================================================

    def add_expectation_result(self, passed: bool, data: Optional[Mapping[str, Any]] = None) -> None:
        """
        Record an expectation outcome. Only failures are kept.

        Raises:
            ExpectationFailed: after recording a failure, when the suite was
                built with throw_on_expectation_failure
        """
        if passed:
            return

        self.result.failed_expectations.append(self.expectation_result_factory(data or {}))
        logger.debug(f"Recorded failed expectation on suite {self.id}")

        if self.throw_on_expectation_failure:
            raise ExpectationFailed()

    def add_deprecation_warning(self, deprecation: Union[str, Mapping[str, Any]]) -> None:
        if isinstance(deprecation, str):
            deprecation = {"message": deprecation}
        self.result.deprecation_warnings.append(self.expectation_result_factory(deprecation))

    def on_exception(self, error: BaseException, kind: Optional[ExceptionKind] = None) -> None:
        """
        Record an error raised while this suite's hooks were running.

        Args:
            error: The raised error
            kind: Classification decided where the error was raised. When
                omitted, the tag carried by the error is used.
        """
        kind = kind or exception_kind(error)
        if kind is ExceptionKind.EXPECTATION_FAILURE:
            return

        data = {
            "matcher_name": "",
            "passed": False,
            "expected": "",
            "actual": "",
            "error": error,
        }
        if self.parent_suite is None:
            data["global_error_type"] = GLOBAL_ERROR_TYPE

        self.result.failed_expectations.append(self.expectation_result_factory(data))
        logger.debug(f"Recorded uncaught error on suite {self.id}: {error!r}")

    def on_multiple_done(self) -> None:
        """
        Report an async hook that signalled completion more than once.

        The current runnable has already moved on by the time this is called,
        so the suite names itself in the message.
        """
        if self.parent_suite is not None:
            msg = (
                "An asynchronous function called its 'done' callback more than "
                "once. This is a bug in the spec, beforeAll, beforeEach, afterAll, "
                "or afterEach function in question. This will be treated as an error "
                "in a future version.\n"
                f"(in suite: {self.get_full_name()})"
            )
        else:
            msg = (
                "A top-level beforeAll or afterAll function called its "
                "'done' callback more than once. This is a bug in the beforeAll "
                "or afterAll function in question. This will be treated as an "
                "error in a future version."
            )

        self.environment.deprecated(msg, ignore_runnable=True)


__all__ = [
    "Suite",
    "SuiteResult",
    "GLOBAL_ERROR_TYPE",
    "STATUS_PENDING",
    "STATUS_FAILED",
    "STATUS_PASSED",
]
