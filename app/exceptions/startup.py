class ConfigurationError(RuntimeError):
    """Raised while the application is being assembled; the process must not start."""
