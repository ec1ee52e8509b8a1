"""Distribution version, shared by the package and the User-Agent header."""

__version__ = "0.5.0"
