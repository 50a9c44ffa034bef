"""Error classes for the qrlive pipeline and its collaborators."""


class QrError(Exception):
    """Base error for all qrlive operations."""
    pass


class EncodeError(QrError):
    """An encode attempt failed; deterministic for the given input."""
    pass


class PayloadTooLarge(EncodeError):
    """No version up to 40 holds the payload at the requested level."""

    def __init__(self, length: int, limit: int, level: str):
        self.length = length
        self.limit = limit
        self.level = level
        super().__init__(
            f"Payload of {length} bytes exceeds the maximum of {limit} bytes "
            f"for error correction level {level}"
        )


class InvalidPayload(EncodeError):
    """Text that cannot be encoded as UTF-8, such as a lone surrogate."""
    pass


class AssemblyOverflow(EncodeError):
    """Codeword count does not match the matrix data capacity."""
    pass


class UnsupportedFormat(QrError, ValueError):
    """Unknown export format token."""

    def __init__(self, token):
        self.token = token
        super().__init__(f"Unsupported export format: {token!r}")


class NotReady(QrError):
    """Copy or download requested while no symbol is displayed."""
    pass


class ClipboardUnavailable(QrError):
    """Raised by a clipboard sink that could not accept the markup."""
    pass


class DownloadFailed(QrError):
    """Raised by a download sink that could not store the file."""
    pass


class PageOverflow(QrError, ValueError):
    """Raster does not fit on the document page."""
    pass
