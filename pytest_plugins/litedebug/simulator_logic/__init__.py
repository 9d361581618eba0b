"""Test logic run by the `litedebug` command."""
