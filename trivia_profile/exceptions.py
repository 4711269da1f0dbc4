"""
Error types raised by the loader and the store.
"""


class ProfileError(Exception):
    """Base class for errors reported to the user."""


class UnrecognizedFormatError(ProfileError):
    def __init__(self, path: str = None):
        self.path = path
        message = (
            "Unrecognized JSON format. Expected game data "
            "(with id/generated/challenges) or raw question array."
        )
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class DataFileNotFoundError(ProfileError, FileNotFoundError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")


class StorageError(ProfileError):
    """Constraint violation or I/O failure in the trivia store."""
