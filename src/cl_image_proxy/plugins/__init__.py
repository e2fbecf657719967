"""Request-handling plugins."""
