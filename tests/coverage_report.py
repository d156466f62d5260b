# File: tests/coverage_report.py
#!/usr/bin/env python3
"""
Generate test coverage report for the multi-floor parking lot.
Requires: pip install coverage
"""

import coverage
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))


def generate_coverage_report():
    """Generate test coverage report"""
    cov = coverage.Coverage(
        source=['multilevel_parking'],
        omit=['*/tests/*', '*/__pycache__/*']
    )
    cov.start()

    try:
        from tests.run_tests import run_all_tests
        result = run_all_tests(verbosity=1)
    finally:
        cov.stop()
        cov.save()

    print("\n" + "=" * 60)
    print("Test Coverage Report")
    print("=" * 60)

    print("\nConsole Report:")
    cov.report(show_missing=True)

    print("\nGenerating HTML report...")
    cov.html_report(directory='htmlcov')
    print("HTML report generated in 'htmlcov' directory")

    print("\nGenerating XML report...")
    cov.xml_report(outfile='coverage.xml')
    print("XML report generated as 'coverage.xml'")

    return result.wasSuccessful()


if __name__ == "__main__":
    sys.exit(0 if generate_coverage_report() else 1)
