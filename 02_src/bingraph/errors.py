"""Error taxonomy for scanning, decoding and writing."""


class BingraphError(Exception):
    """Base class for every error raised by bingraph."""


class GeneralError(BingraphError):
    """Structural failure, e.g. invalid configuration."""


class _PathError(BingraphError):
    prefix = ""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{self.prefix}: {path}: {reason}")
        self.path = path
        self.reason = reason

    # Failures cross process boundaries when decoding runs with --jobs.
    def __reduce__(self):
        return (self.__class__, (self.path, self.reason))


class ScanIOError(_PathError):
    """A file could not be read or an output could not be written."""

    prefix = "io"


class BinaryFormatError(_PathError):
    """A file is not a recognized binary container."""

    prefix = "format"
