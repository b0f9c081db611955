"""Task manager backend: user accounts and to-do tasks over a REST API."""

__version__ = "0.1.0"
