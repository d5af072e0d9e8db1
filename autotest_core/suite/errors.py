"""Suite-level errors and the expectation-failed control signal."""

from autotest_core.errors import ExceptionKind, SuiteError


class SuiteConfigurationError(SuiteError):
    """Raised when a suite is used without a collaborator it needs."""


class ExpectationFailed(SuiteError):
    """
    Control signal that unwinds the current runnable after a failed
    expectation has been recorded. Carries no payload.
    """

    kind = ExceptionKind.EXPECTATION_FAILURE

    def __init__(self):
        super().__init__("Expectation failed")


def exception_kind(error: BaseException) -> ExceptionKind:
    """Return the kind tag carried by ``error``, defaulting to UNCAUGHT_ERROR."""
    kind = getattr(error, "kind", None)
    if isinstance(kind, ExceptionKind):
        return kind
    return ExceptionKind.UNCAUGHT_ERROR


__all__ = [
    "ExceptionKind",
    "SuiteError",
    "SuiteConfigurationError",
    "ExpectationFailed",
    "exception_kind",
]
