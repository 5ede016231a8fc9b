"""mateboard: variable-size chess rules engine and mate-puzzle validator."""

__version__ = "0.1.0"
