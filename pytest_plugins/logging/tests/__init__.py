"""Tests for the logging plugin."""
