"""Land ownership registry with fractional sales under a single inspector."""

__version__ = "0.1.0"
