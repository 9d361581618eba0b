"""Pytest plugins that implement the litedebug hive simulator."""
