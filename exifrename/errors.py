"""
Error types raised while renaming files.
"""


class RenameError(Exception):
    """Base error for the project."""


class MetadataUnavailable(RenameError):
    """No usable original-capture timestamp could be read from a file."""

    def __init__(self, path: str, reason: str):
        super().__init__(reason)
        self.path = path
        self.reason = reason


class NotApplicable(MetadataUnavailable):
    """The file is not an image, so it carries no capture timestamp."""

    def __init__(self, path: str):
        super().__init__(path, "Could not find DateTimeOriginal EXIF tag (not an image)")


class DestinationConflict(RenameError):
    def __init__(self, path: str, destination: str):
        super().__init__(f'Not overwriting existing file "{destination}"')
        self.path = path
        self.destination = destination


class FilesystemError(RenameError):
    def __init__(self, path: str, cause: OSError):
        super().__init__(str(cause))
        self.path = path
        self.cause = cause


class DiscoveryError(FilesystemError):
    """A directory could not be listed while walking."""


class GroupingError(RenameError):
    """A filename was claimed by two groups."""
