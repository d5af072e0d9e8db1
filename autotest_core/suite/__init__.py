"""
================================================================================
Suite Bookkeeping
================================================================================

Passive state objects describing the suite tree: hooks, aggregated results,
shared fixture context and failure classification.

Modules:
    - suite: Suite node and SuiteResult record
    - hooks: Hook slots and ordered hook lists
    - user_context: Fixture context value type
    - expectation_result: Normalized failure/deprecation records
    - environment: Deprecation channel
    - timer: Elapsed-time source
    - errors: Error taxonomy and the expectation-failed control signal

================================================================================
"""

from .environment import DeprecationLog, Environment
from .errors import (
    ExceptionKind,
    ExpectationFailed,
    SuiteConfigurationError,
    SuiteError,
    exception_kind,
)
from .expectation_result import ExpectationResult, build_expectation_result
from .hooks import Hook, HookList, HookOrder
from .suite import GLOBAL_ERROR_TYPE, Suite, SuiteResult
from .timer import Timer
from .user_context import UserContext

__all__ = [
    "DeprecationLog",
    "Environment",
    "ExceptionKind",
    "ExpectationFailed",
    "SuiteConfigurationError",
    "SuiteError",
    "exception_kind",
    "ExpectationResult",
    "build_expectation_result",
    "Hook",
    "HookList",
    "HookOrder",
    "GLOBAL_ERROR_TYPE",
    "Suite",
    "SuiteResult",
    "Timer",
    "UserContext",
]
