"""Library management on SQLite: book catalogue, user accounts, lending and a console."""

__version__ = "0.1.0"
__all__ = ["__version__"]