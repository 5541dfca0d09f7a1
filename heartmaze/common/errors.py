class ConfigurationError(ValueError):
    """Invalid difficulty label, maze dimensions, or config value."""
