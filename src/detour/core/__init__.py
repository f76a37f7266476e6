"""Core redirect policy logic, configuration, and logging."""
