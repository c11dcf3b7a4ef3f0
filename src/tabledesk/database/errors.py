"""Error kinds raised by the database layer."""


class DatabaseError(Exception):
    """Storage failure, as opposed to a programming or validation error."""


class ValidationError(ValueError):
    """Input rejected before any storage call was made."""
