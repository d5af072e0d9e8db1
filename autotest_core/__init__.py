"""
================================================================================
Autotest Core
================================================================================

Suite-hierarchy bookkeeping for a test framework.

Modules:
    - common: Shared configuration and logging utilities
    - suite: Suite tree nodes, hooks, results and fixture context

Example:
    from autotest_core.suite import Suite

    root = Suite("suite0", "Top Suite")
    calculator = Suite("suite1", "Calculator", parent_suite=root)
    root.add_child(calculator)

    calculator.before_all(lambda: None)
    calculator.start_timer()
    ...
    calculator.end_timer()
    report = calculator.get_result().to_dict()

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "suite",
]
