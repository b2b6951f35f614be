"""FileBinaryStore custom exception module."""


class InvalidConfiguration(Exception):
    """Custom exception thrown when a BinaryStore cannot be initialized because the store
    path is not a usable directory (not a directory, cannot be created, read or written)
    or the shard depth is not a non-negative integer."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors


class BinaryNotFound(Exception):
    """Custom exception thrown when a binary is requested for an id that has no file at
    its sharded location."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors


class StreamCreationFailure(Exception):
    """Custom exception thrown when a read or write stream cannot be opened on a
    binary's file (ex. permissions revoked between locating and opening the file)."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors
