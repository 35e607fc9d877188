"""
Domain models for blood-pressure tracking.

These models represent the core business concepts and are framework-agnostic.
They use Pydantic for validation but could be swapped to dataclasses if needed.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class PressureCategory(str, Enum):
    """Risk buckets derived from a reading, ordered from lowest to highest."""

    NORMAL = "normal"
    PRE_HYPERTENSION = "pre_hypertension"
    HYPERTENSION_1 = "hypertension_1"
    HYPERTENSION_2 = "hypertension_2"
    CRITICAL = "critical"


class CategoryColor(BaseModel):
    """RGB color token used to render a category."""

    model_config = ConfigDict(frozen=True)

    red: int = Field(ge=0, le=255)
    green: int = Field(ge=0, le=255)
    blue: int = Field(ge=0, le=255)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def hex(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"


class PressureRecord(BaseModel):
    """A single systolic/diastolic measurement."""

    model_config = ConfigDict(frozen=True)  # Edits go through model_copy

    id: int = Field(default=0, ge=0, description="Store-assigned id, 0 before persistence")
    systolic: int = Field(description="Systolic pressure in mmHg")
    diastolic: int = Field(description="Diastolic pressure in mmHg")
    timestamp: int = Field(description="Milliseconds since epoch, stamped at creation")
    time_label: str = Field(description="HH:mm captured at creation")
    note: str = Field(default="")


class PressureStatistics(BaseModel):
    """Summary of a non-empty set of readings."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(gt=0)
    average_systolic: int
    average_diastolic: int
    max_systolic: int
    min_systolic: int
    max_diastolic: int
    min_diastolic: int


class ChartSeries(BaseModel):
    """One metric prepared for a trend chart, oldest reading first."""

    model_config = ConfigDict(frozen=True)

    title: str
    values: list[int] = Field(min_length=1)
    lower_bound: int
    upper_bound: int
    color: CategoryColor
