"""A hive simulator checking the lite debug RPC mode of KCC clients."""
