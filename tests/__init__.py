"""Test suites for the multi-floor parking lot."""
