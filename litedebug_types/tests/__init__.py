"""Unit tests for the account, transaction and genesis types."""
