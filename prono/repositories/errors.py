class DuplicateRecordError(ValueError):
    """Raised when a unique index rejects an insert."""
    pass
