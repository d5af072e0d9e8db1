"""
================================================================================
Expectation Results
================================================================================

Normalized records for failed expectations, synthetic failures created from
uncaught errors, and deprecation warnings. All three share one shape so that
reporters can treat them uniformly.

Serialized field names (see ExpectationResult.to_dict) are the ones reporters
bind to: matcherName, message, stack, passed, expected, actual and, for
failures outside any spec, globalErrorType.

================================================================================
"""

import traceback
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass
class ExpectationResult:
    """A single recorded expectation outcome."""
    matcher_name: str = ""
    message: str = ""
    stack: str = ""
    passed: bool = False
    expected: Any = ""
    actual: Any = ""
    error: Optional[BaseException] = None
    global_error_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "matcherName": self.matcher_name,
            "message": self.message,
            "stack": self.stack,
            "passed": self.passed,
            "expected": self.expected,
            "actual": self.actual,
        }
        if self.global_error_type is not None:
            data["globalErrorType"] = self.global_error_type
        return data


def _error_message(error: BaseException) -> str:
    text = str(error)
    if not text:
        return type(error).__name__
    return f"{type(error).__name__}: {text}"


def _error_stack(error: BaseException) -> str:
    if error.__traceback__ is None:
        return ""
    return "".join(
        traceback.format_exception(type(error), error, error.__traceback__)
    )


def build_expectation_result(
    data: Optional[Mapping[str, Any]] = None,
    **kwargs: Any
) -> ExpectationResult:
    """
    Build a normalized ExpectationResult.

    Args:
        data: Mapping with any of matcher_name (or matcherName), passed,
              expected, actual, message, error, stack
        **kwargs: Same keys, merged over ``data``

    Returns:
        ExpectationResult

    Message resolution:
        passed -> "Passed."; explicit message -> as given;
        error -> "<ErrorType>: <text>"; otherwise "Failed."
    """
    fields: Dict[str, Any] = dict(data or {})
    fields.update(kwargs)

    passed = bool(fields.get("passed", False))
    error = fields.get("error")

    if passed:
        message = "Passed."
    elif fields.get("message"):
        message = str(fields["message"])
    elif isinstance(error, BaseException):
        message = _error_message(error)
    else:
        message = "Failed."

    stack = fields.get("stack") or ""
    if not passed and isinstance(error, BaseException):
        stack = _error_stack(error) or stack

    return ExpectationResult(
        matcher_name=fields.get("matcher_name", fields.get("matcherName", "")) or "",
        message=message,
        stack=stack,
        passed=passed,
        expected=fields.get("expected", ""),
        actual=fields.get("actual", ""),
        error=error if isinstance(error, BaseException) else None,
        global_error_type=fields.get("global_error_type"),
    )


__all__ = ["ExpectationResult", "build_expectation_result"]
