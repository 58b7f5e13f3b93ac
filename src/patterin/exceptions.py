"""Exception hierarchy for Patterin."""


class PatterinError(Exception):
    """Base exception for all Patterin errors."""

    pass


class GeometryError(PatterinError):
    """Errors in geometric construction."""

    pass


class InvalidGeometryError(GeometryError):
    """A shape cannot be built from the given input."""

    def __init__(self, reason: str, count: int | None = None) -> None:
        self.reason = reason
        self.count = count
        super().__init__(f"Invalid geometry: {reason}")


class DocumentError(PatterinError):
    """Errors related to reading or writing shape documents."""

    pass


class DocumentLoadError(DocumentError):
    """Error loading a shape document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load shapes from '{path}': {reason}")


class DocumentSaveError(DocumentError):
    """Error saving a shape document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save shapes to '{path}': {reason}")


class DocumentFormatError(DocumentError):
    """Document does not have the expected structure."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid shape document '{path}': {details}")


class ProcessingCancelledError(PatterinError):
    """Batch processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
