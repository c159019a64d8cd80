class NotFoundError(LookupError):
    """A point lookup found no row for the requested key."""

    def __init__(self, table: str, key: object) -> None:
        self.table = table
        self.key = key
        super().__init__(f"No entry in '{table}' for key {key!r}")


class StorageError(Exception):
    """The storage engine failed while running a transaction."""
