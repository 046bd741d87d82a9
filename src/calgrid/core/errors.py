class CalgridError(Exception):
    """Base error."""

class ConfigurationError(CalgridError, ValueError):
    """Raised when the engine is configured with a value outside its contract."""

class UnknownLocaleError(CalgridError, KeyError):
    """Raised when no name tables are registered for a locale."""
