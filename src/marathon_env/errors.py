"""Exceptions raised by the marathon_env pipeline."""


class MarathonEnvError(ValueError):
    """Base class for fatal pipeline errors."""


class ConfigurationError(MarathonEnvError):
    """An input source is unreadable or lacks required columns."""


class DataValidityError(MarathonEnvError):
    """A value falls outside its fixed domain (codes, ages, join keys)."""
