"""Command line interface of the litedebug simulator."""
