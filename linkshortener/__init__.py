"""linkshortener: short-code registry and redirection engine."""

__version__ = '1.0.0'
