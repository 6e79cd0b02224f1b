"""Fix imports and format Python source files, including ``./...`` patterns."""

__version__ = "0.1.0"
