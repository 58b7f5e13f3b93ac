"""Shape document I/O layer for patterin.

This module handles reading and writing JSON shape documents. It provides
a clean abstraction layer between the file format and the domain models.

Key responsibilities:
- Load and validate shape documents (pydantic models)
- Convert records to domain shapes and back
- Write result documents, leaving out ephemeral shapes

Key classes:
- ShapeReader: Load documents and yield shapes
- ShapeWriter: Save shapes to a document
"""

from patterin.io.converter import ShapeDocument, ShapeRecord
from patterin.io.reader import ShapeReader
from patterin.io.writer import ShapeWriter

__all__ = [
    "ShapeDocument",
    "ShapeReader",
    "ShapeRecord",
    "ShapeWriter",
]
