"""Tests for the shared pytest plugins."""
