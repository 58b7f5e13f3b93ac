"""Shape document reader.

This module provides the ShapeReader class for loading JSON shape documents
and converting their records into domain shapes.
"""

from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from patterin.domain import Shape
from patterin.exceptions import DocumentFormatError, DocumentLoadError, InvalidGeometryError
from patterin.io.converter import ShapeDocument, record_to_shape


class ShapeReader:
    """Loads shape documents and yields domain shapes.

    Example:
        reader = ShapeReader(Path("shapes.json"))
        reader.load()
        for shape in reader.iter_shapes():
            print(shape.area())
    """

    def __init__(self, path: Path) -> None:
        """Initialize the reader.

        Args:
            path: Path to the JSON shape document
        """
        self._path = path
        self._document: ShapeDocument | None = None

    def load(self) -> None:
        """Read and validate the document.

        Raises:
            FileNotFoundError: If the document does not exist
            DocumentLoadError: If the file cannot be read
            DocumentFormatError: If the content is not a valid shape document
        """
        if not self._path.exists():
            raise FileNotFoundError(f"Shape document not found: {self._path}")

        try:
            text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(str(self._path), str(e)) from e

        try:
            self._document = ShapeDocument.model_validate_json(text)
        except ValidationError as e:
            raise DocumentFormatError(str(self._path), str(e)) from e

    @property
    def shape_count(self) -> int:
        """Number of shape records in the document.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        if self._document is None:
            raise RuntimeError("Document not loaded. Call load() first.")
        return len(self._document.shapes)

    def iter_shapes(self, include_ephemeral: bool = True) -> Iterator[Shape]:
        """Iterate over the document's shapes in order.

        Args:
            include_ephemeral: Whether to yield construction-only shapes

        Yields:
            Domain shapes

        Raises:
            RuntimeError: If the document has not been loaded yet
            DocumentFormatError: If a record cannot form a shape
        """
        if self._document is None:
            raise RuntimeError("Document not loaded. Call load() first.")

        for index, record in enumerate(self._document.shapes):
            if record.ephemeral and not include_ephemeral:
                continue
            try:
                yield record_to_shape(record)
            except InvalidGeometryError as e:
                raise DocumentFormatError(
                    str(self._path), f"shape {index}: {e.reason}"
                ) from e

    def read_all(self, include_ephemeral: bool = True) -> list[Shape]:
        """Load (if needed) and return every shape."""
        if self._document is None:
            self.load()
        return list(self.iter_shapes(include_ephemeral))

    def close(self) -> None:
        """Release the parsed document."""
        self._document = None

    def __enter__(self) -> "ShapeReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
