# File: tests/run_tests.py
#!/usr/bin/env python3
"""
Test runner for the multi-floor parking lot tests.

Usage:
    python tests/run_tests.py                         # everything
    python tests/run_tests.py unit                    # one suite
    python tests/run_tests.py unit.test_parking_lot   # one module
"""

import unittest
import sys
from pathlib import Path

# Make the multilevel_parking package importable without installing it
sys.path.append(str(Path(__file__).parent.parent))

TESTS_DIR = Path(__file__).parent


def run_all_tests(verbosity: int = 2):
    """Run all test suites"""
    test_loader = unittest.TestLoader()
    test_suite = test_loader.discover(str(TESTS_DIR), pattern='test_*.py')

    test_runner = unittest.TextTestRunner(verbosity=verbosity)
    return test_runner.run(test_suite)


def run_specific_test(test_name: str, verbosity: int = 2):
    """Run one suite directory (unit, integration) or one dotted test module"""
    test_loader = unittest.TestLoader()

    suite_dir = TESTS_DIR / test_name
    if suite_dir.is_dir():
        test_suite = test_loader.discover(
            str(suite_dir), pattern='test_*.py', top_level_dir=str(TESTS_DIR.parent)
        )
    else:
        test_suite = test_loader.loadTestsFromName(f'tests.{test_name}')

    test_runner = unittest.TextTestRunner(verbosity=verbosity)
    return test_runner.run(test_suite)


if __name__ == "__main__":
    if len(sys.argv) > 1:
        result = run_specific_test(sys.argv[1])
    else:
        result = run_all_tests()

    sys.exit(0 if result.wasSuccessful() else 1)
