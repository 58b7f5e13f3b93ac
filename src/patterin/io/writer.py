"""Shape document writer.

This module provides the ShapeWriter class for saving result shapes as a
JSON shape document.
"""

from collections.abc import Iterable
from pathlib import Path

from patterin.domain import Shape
from patterin.exceptions import DocumentSaveError
from patterin.io.converter import ShapeDocument, shape_to_record


class ShapeWriter:
    """Writes shapes to a JSON document.

    Ephemeral shapes are construction geometry and are left out unless
    requested.

    Example:
        writer = ShapeWriter(Path("result.json"))
        writer.save(shapes)
    """

    def __init__(self, output_path: Path, include_ephemeral: bool = False) -> None:
        """Initialize the writer.

        Args:
            output_path: Path where the document will be saved
            include_ephemeral: Whether to keep ephemeral shapes in the output
        """
        self._output_path = output_path
        self._include_ephemeral = include_ephemeral

    def to_document(self, shapes: Iterable[Shape]) -> ShapeDocument:
        """Build the document model for shapes."""
        return ShapeDocument(
            shapes=[
                shape_to_record(s)
                for s in shapes
                if self._include_ephemeral or not s.ephemeral
            ]
        )

    def save(self, shapes: Iterable[Shape]) -> int:
        """Save shapes to the output path.

        Returns:
            Number of shapes written

        Raises:
            DocumentSaveError: If the file cannot be written
        """
        document = self.to_document(shapes)
        try:
            self._output_path.write_text(
                document.model_dump_json(indent=2), encoding="utf-8"
            )
        except OSError as e:
            raise DocumentSaveError(str(self._output_path), str(e)) from e
        return len(document.shapes)

    @staticmethod
    def get_result_path(input_path: Path, operation: str) -> Path:
        """Generate an output path next to the input.

        Converts: shapes.json -> shapes-union.json

        Args:
            input_path: Original document path
            operation: Operation name used as suffix

        Returns:
            Path with -{operation} suffix before extension
        """
        return input_path.parent / f"{input_path.stem}-{operation}{input_path.suffix}"
