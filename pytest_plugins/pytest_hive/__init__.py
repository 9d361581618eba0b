"""A pytest plugin that runs the collected tests as a hive simulator."""
