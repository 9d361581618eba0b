"""Concise help for the litedebug command."""
