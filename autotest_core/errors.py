"""
Base exceptions shared by every autotest_core package.

Failures raised during hook or spec execution fall into two kinds, tagged by
the site that raises them:

    - EXPECTATION_FAILURE: an assertion mismatch that has already been
      recorded on the runnable. Only raised to unwind the runnable when
      throw-on-expectation-failure is configured.
    - UNCAUGHT_ERROR: anything else. Recorded by the suite as a synthetic
      failed expectation.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ExceptionKind(str, Enum):
    """How a raised error should be treated by the catching suite."""
    EXPECTATION_FAILURE = "expectation_failure"
    UNCAUGHT_ERROR = "uncaught_error"


class SuiteError(Exception):
    """Base exception for autotest_core."""

    kind = ExceptionKind.UNCAUGHT_ERROR

    def __init__(
        self,
        message: str = "Suite error",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Return the exception as a plain dictionary."""
        return {
            "error_name": type(self).__name__,
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


__all__ = ["ExceptionKind", "SuiteError"]
