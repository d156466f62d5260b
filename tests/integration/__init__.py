"""
Integration tests for the multi-floor parking lot

These tests drive the system the way a user does: command lines in,
rendered output lines out, through the console shell and the CLI entry
point, plus concurrent use of a single lot.
"""
