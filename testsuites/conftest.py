"""
================================================================================
Root Pytest Configuration
================================================================================

Registers the markers used across the test suites and provides the suite
tree fixtures shared by the unit tests.

================================================================================
"""

import pytest

from autotest_core.suite import DeprecationLog, Suite


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Test type markers
    config.addinivalue_line(
        "markers", "unit: Isolated tests of a single component"
    )
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "naming: Tests related to suite identity and full names"
    )
    config.addinivalue_line(
        "markers", "hooks: Tests related to hook registration and cleanup"
    )
    config.addinivalue_line(
        "markers", "results: Tests related to status and failure recording"
    )
    config.addinivalue_line(
        "markers", "context: Tests related to the shared fixture context"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add the 'unit' marker to tests in the unit directory."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def environment() -> DeprecationLog:
    return DeprecationLog()


@pytest.fixture
def suite_tree(environment):
    """
    Root -> "Calculator" -> "add", all sharing one deprecation log.

    Returned as a dict so tests keep every node alive for the weak parent links.
    """
    root = Suite("suite0", "Top Suite", environment=environment)
    calculator = Suite("suite1", "Calculator", parent_suite=root, environment=environment)
    add = Suite("suite2", "add", parent_suite=calculator, environment=environment)
    root.add_child(calculator)
    calculator.add_child(add)
    return {"root": root, "calculator": calculator, "add": add}
