"""Unit tests for the JSON-RPC client."""
