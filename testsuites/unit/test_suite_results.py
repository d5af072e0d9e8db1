import pytest

from autotest_core.common import set_config
from autotest_core.suite import (
    ExceptionKind,
    ExpectationFailed,
    ExpectationResult,
    GLOBAL_ERROR_TYPE,
    Suite,
    SuiteConfigurationError,
    Timer,
)


pytestmark = pytest.mark.results


FAILURE = {"matcher_name": "toEqual", "passed": False, "expected": 1, "actual": 2, "message": "Expected 2 to equal 1."}


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_new_suite_passes(suite_tree):
    assert suite_tree["calculator"].status() == "passed"


def test_passed_expectation_is_not_recorded(suite_tree):
    suite = suite_tree["calculator"]

    suite.add_expectation_result(True, FAILURE)

    assert suite.result.failed_expectations == []
    assert suite.status() == "passed"


def test_each_failed_expectation_is_recorded_once(suite_tree):
    suite = suite_tree["calculator"]

    suite.add_expectation_result(False, FAILURE)
    suite.add_expectation_result(False, FAILURE)

    assert len(suite.result.failed_expectations) == 2
    recorded = suite.result.failed_expectations[0]
    assert recorded.matcher_name == "toEqual"
    assert recorded.message == "Expected 2 to equal 1."
    assert suite.status() == "failed"


def test_pending_takes_precedence_over_failures(suite_tree):
    suite = suite_tree["calculator"]

    suite.pend()
    suite.add_expectation_result(False, FAILURE)

    assert suite.status() == "pending"
    assert suite.get_result().status == "pending"


def test_throw_on_expectation_failure_records_then_raises():
    suite = Suite("suite1", "strict", throw_on_expectation_failure=True)

    with pytest.raises(ExpectationFailed) as excinfo:
        suite.add_expectation_result(False, FAILURE)

    assert len(suite.result.failed_expectations) == 1

    suite.on_exception(excinfo.value)
    assert len(suite.result.failed_expectations) == 1


def test_throw_on_expectation_failure_read_from_config():
    set_config("suite.throw_on_expectation_failure", "true")

    suite = Suite("suite1", "strict")

    assert suite.throw_on_expectation_failure is True


def test_explicit_flag_overrides_config():
    set_config("suite.throw_on_expectation_failure", True)

    suite = Suite("suite1", "lenient", throw_on_expectation_failure=False)

    assert suite.throw_on_expectation_failure is False


def test_uncaught_error_is_recorded_as_failure(suite_tree):
    suite = suite_tree["calculator"]
    error = ValueError("boom")

    suite.on_exception(error)

    [failure] = suite.result.failed_expectations
    assert failure.matcher_name == ""
    assert failure.expected == ""
    assert failure.actual == ""
    assert failure.passed is False
    assert failure.error is error
    assert failure.message == "ValueError: boom"
    assert failure.global_error_type is None
    assert suite.status() == "failed"


def test_root_errors_are_tagged_global(suite_tree):
    root = suite_tree["root"]

    root.on_exception(RuntimeError("setup failed"))

    [failure] = root.result.failed_expectations
    assert failure.global_error_type == GLOBAL_ERROR_TYPE == "afterAll"


def test_raised_error_keeps_its_stack(suite_tree):
    suite = suite_tree["calculator"]
    try:
        raise KeyError("missing")
    except KeyError as e:
        suite.on_exception(e)

    assert "Traceback" in suite.result.failed_expectations[0].stack


def test_catch_site_can_classify_error(suite_tree):
    suite = suite_tree["calculator"]

    suite.on_exception(AssertionError("already recorded"), kind=ExceptionKind.EXPECTATION_FAILURE)
    suite.on_exception(ExpectationFailed(), kind=ExceptionKind.UNCAUGHT_ERROR)

    assert len(suite.result.failed_expectations) == 1


def test_deprecations_do_not_affect_status(suite_tree):
    suite = suite_tree["calculator"]

    suite.add_deprecation_warning("old api")
    suite.add_deprecation_warning({"message": "older api"})

    messages = [d.message for d in suite.result.deprecation_warnings]
    assert messages == ["old api", "older api"]
    assert suite.status() == "passed"


def test_suite_properties_last_write_wins(suite_tree):
    suite = suite_tree["calculator"]
    assert suite.result.properties is None

    suite.set_suite_property("owner", "team-a")
    suite.set_suite_property("owner", "team-b")
    suite.set_suite_property("retries", 2)

    assert suite.result.properties == {"owner": "team-b", "retries": 2}


def test_timer_duration_is_stored_on_end():
    clock = FakeClock()
    suite = Suite("suite1", "timed", timer=Timer(now=clock))

    clock.now = 10.0
    suite.start_timer()
    clock.now = 10.25
    assert suite.result.duration is None

    suite.end_timer()

    assert suite.result.duration == pytest.approx(250.0)


def test_result_serializes_with_reporter_field_names(suite_tree):
    suite = suite_tree["add"]
    suite.add_expectation_result(False, FAILURE)
    suite.add_deprecation_warning("old api")

    data = suite.get_result().to_dict()

    assert set(data) == {
        "id", "description", "fullName", "failedExpectations",
        "deprecationWarnings", "duration", "properties", "status",
    }
    assert data["fullName"] == "Calculator add"
    assert data["status"] == "failed"
    assert data["failedExpectations"][0]["matcherName"] == "toEqual"
    assert data["deprecationWarnings"][0]["message"] == "old api"


def test_custom_result_factory_is_used(suite_tree):
    calls = []

    def factory(data):
        calls.append(dict(data))
        return ExpectationResult(message="custom")

    suite = Suite("suite9", "custom", expectation_result_factory=factory)
    suite.add_expectation_result(False, FAILURE)

    assert calls == [FAILURE]
    assert suite.result.failed_expectations[0].message == "custom"


def test_expect_delegates_to_factories():
    seen = []
    suite = Suite(
        "suite1",
        "expectations",
        expectation_factory=lambda actual, s: seen.append(("sync", actual, s)) or "sync",
        async_expectation_factory=lambda actual, s: seen.append(("async", actual, s)) or "async",
    )

    assert suite.expect(1) == "sync"
    assert suite.expect_async(2) == "async"
    assert seen == [("sync", 1, suite), ("async", 2, suite)]


def test_expect_without_factory_raises():
    suite = Suite("suite1", "bare")

    with pytest.raises(SuiteConfigurationError):
        suite.expect(1)


def test_mapping_result_factory_gets_global_tag_for_root_errors(suite_tree):
    root = Suite("suite0", "Top Suite", expectation_result_factory=lambda data: dict(data))
    child = Suite("suite1", "child", parent_suite=root, expectation_result_factory=lambda data: dict(data))

    root.on_exception(RuntimeError("setup failed"))
    child.on_exception(RuntimeError("spec failed"))

    assert root.result.failed_expectations[0]["global_error_type"] == GLOBAL_ERROR_TYPE
    assert "global_error_type" not in child.result.failed_expectations[0]
