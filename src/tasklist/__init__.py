"""Single-screen to-do list backed by a local SQLite store."""

__version__ = "0.1.0"
