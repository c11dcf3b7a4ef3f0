"""tabledesk: search/sort/CRUD view state over a single SQLite table."""

__version__ = "0.1.0"
