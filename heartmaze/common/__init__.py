from .errors import ConfigurationError

__all__ = ['ConfigurationError']
