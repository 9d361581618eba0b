"""Tests for the litedebug simulator plugin."""
