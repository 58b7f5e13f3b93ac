"""Configuration settings for Patterin."""

from pathlib import Path

from pydantic import BaseModel, Field


class GeometryConfig(BaseModel):
    """Tolerances used by the boolean pipeline.

    The kernel works with fixed epsilons rather than exact arithmetic; these
    values reproduce the defaults documented for each phase.
    """

    vector_epsilon: float = Field(
        default=1e-10,
        gt=0.0,
        description="Per-axis tolerance for matching endpoints and zero-length edges",
    )
    shatter_epsilon: float = Field(
        default=1e-8,
        gt=0.0,
        description="Determinant threshold for intersections during shatter",
    )
    split_parameter_epsilon: float = Field(
        default=1e-5,
        gt=0.0,
        lt=0.5,
        description="Split parameters this close to 0 or 1 are treated as endpoints",
    )
    min_sub_edge_length: float = Field(
        default=1e-5,
        gt=0.0,
        description="Shattered pieces shorter than this are dropped",
    )
    containment_epsilon: float = Field(
        default=1e-4,
        gt=0.0,
        description="Epsilon handed to Shape.contains_point during filtering",
    )
    boundary_epsilon: float = Field(
        default=1e-4,
        gt=0.0,
        description="Distance under which a point counts as on a shape boundary",
    )
    side_sample_distance: float = Field(
        default=1e-3,
        gt=0.0,
        description="Offset from a shared boundary used to sample the area beside it",
    )
    coincidence_tolerance: float = Field(
        default=1e-6,
        gt=0.0,
        description="Max sine of the angle between edges treated as coincident",
    )
    stitch_key_precision: int = Field(
        default=4,
        ge=0,
        le=12,
        description="Decimal places used to key sub-edge start points",
    )
    closure_tolerance: float = Field(
        default=1e-4,
        gt=0.0,
        description="Distance under which a stitched chain counts as closed",
    )


class OffsetConfig(BaseModel):
    """Configuration for outline offsetting."""

    miter_limit: float = Field(
        default=4.0,
        ge=1.0,
        description="Maximum miter length as a multiple of the offset distance",
    )
    line_epsilon: float = Field(
        default=1e-10,
        gt=0.0,
        description="Determinant threshold for intersecting offset lines",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes for offset batches (None = auto)",
    )
    include_ephemeral: bool = Field(
        default=False,
        description="Feed ephemeral (construction-only) shapes into operations",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class PatterinSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    offset: OffsetConfig = Field(default_factory=OffsetConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PatterinSettings:
    """Get default application settings."""
    return PatterinSettings()
