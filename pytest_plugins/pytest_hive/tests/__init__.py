"""Tests for the pytest_hive plugin."""
