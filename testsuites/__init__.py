"""
Test suites package.

Kept importable so `run_tests.py` and IDEs can address test modules by path.
"""
