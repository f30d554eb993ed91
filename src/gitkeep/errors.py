class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass
