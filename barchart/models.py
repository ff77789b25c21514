"""Pydantic models shared by the encoder, the renderers and the API."""
from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    """One bar: a category and its already coerced numeric value."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category: str = Field(..., alias="team", description="Category key, unique within a dataset")
    value: float = Field(..., description="Non-negative finite value")


class Margins(BaseModel):
    model_config = ConfigDict(frozen=True)

    top: int = 20
    right: int = 20
    bottom: int = 70
    left: int = 40


class Canvas(BaseModel):
    """Outer drawing surface and the margins carving out the plot area."""

    model_config = ConfigDict(frozen=True)

    outer_width: int = 600
    outer_height: int = 300
    margins: Margins = Field(default_factory=Margins)

    @property
    def width(self) -> int:
        return self.outer_width - self.margins.left - self.margins.right

    @property
    def height(self) -> int:
        return self.outer_height - self.margins.top - self.margins.bottom


class BarGeometry(BaseModel):
    """Rectangle for one record, in plot-area pixel coordinates."""

    model_config = ConfigDict(frozen=True)

    category: str
    value: float
    x: float = 0.0
    y: float
    width: float
    height: float


class AxisTick(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: float
    label: str


class AxisDescriptor(BaseModel):
    """Ticks of one axis plus where the axis group sits inside the plot area."""

    model_config = ConfigDict(frozen=True)

    orientation: Literal["top", "right", "bottom", "left"]
    offset_x: float = 0.0
    offset_y: float = 0.0
    ticks: List[AxisTick] = Field(default_factory=list)


class ChartGeometry(BaseModel):
    """Everything a drawing surface needs to paint the chart."""

    model_config = ConfigDict(frozen=True)

    canvas: Canvas
    bars: List[BarGeometry]
    value_axis: AxisDescriptor
    category_axis: AxisDescriptor


class RenderedChart(BaseModel):
    """Encoded image artefact returned by the PNG endpoint."""

    type: str = "bar"
    format: str
    title: Optional[str] = None
    image: str


class ChartError(Exception):
    """Base error for chart encoding failures, carrying the offending value."""

    def __init__(self, message: str, *, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidInput(ChartError):
    """Raised for empty datasets, bad dimensions, bad values or bad padding."""


class UnknownCategory(ChartError):
    """Raised when geometry is requested for a category outside the band domain."""
