"""Unit tests for the primitive types."""
