"""Selftests. Run everything with `python -m selftest.run_all` or pytest."""
