"""Chess rules referee for two human players."""

__version__ = "0.1.0"
