"""Weekly class schedule model and conflict engine."""

__version__ = "0.1.0"
