"""Models for Dexcom Share glucose readings."""

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Trend(str, Enum):
    """Rate-of-change classification attached to a glucose reading.

    Member order matches the numeric encoding used by older Share responses
    (``0`` is ``NONE``, ``9`` is ``RATE_OUT_OF_RANGE``).
    """

    NONE = "None"
    DOUBLE_UP = "DoubleUp"
    SINGLE_UP = "SingleUp"
    FORTY_FIVE_UP = "FortyFiveUp"
    FLAT = "Flat"
    FORTY_FIVE_DOWN = "FortyFiveDown"
    SINGLE_DOWN = "SingleDown"
    DOUBLE_DOWN = "DoubleDown"
    NOT_COMPUTABLE = "NotComputable"
    RATE_OUT_OF_RANGE = "RateOutOfRange"

    @classmethod
    def from_server(cls, value: Union[str, int]) -> "Trend":
        """
        Decode the server's trend encoding.

        Args:
            value: Trend name (``"Flat"``) or numeric index (``4``)

        Returns:
            Trend: The decoded trend

        Raises:
            ValueError: If the value is not a known name or index
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid trend value: {value!r}")
        if isinstance(value, int):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise ValueError(f"Trend index {value} out of range")
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls.from_server(int(text))
            return cls(text)
        raise ValueError(f"Invalid trend value: {value!r}")

    @property
    def glyph(self) -> str:
        return _TREND_GLYPHS[self]

    @property
    def description(self) -> str:
        return _TREND_DESCRIPTIONS[self]


_TREND_GLYPHS = {
    Trend.NONE: "",
    Trend.DOUBLE_UP: "↑↑",
    Trend.SINGLE_UP: "↑",
    Trend.FORTY_FIVE_UP: "↗",
    Trend.FLAT: "→",
    Trend.FORTY_FIVE_DOWN: "↘",
    Trend.SINGLE_DOWN: "↓",
    Trend.DOUBLE_DOWN: "↓↓",
    Trend.NOT_COMPUTABLE: "?",
    Trend.RATE_OUT_OF_RANGE: "-",
}

_TREND_DESCRIPTIONS = {
    Trend.NONE: "",
    Trend.DOUBLE_UP: "rising quickly",
    Trend.SINGLE_UP: "rising",
    Trend.FORTY_FIVE_UP: "rising slightly",
    Trend.FLAT: "steady",
    Trend.FORTY_FIVE_DOWN: "falling slightly",
    Trend.SINGLE_DOWN: "falling",
    Trend.DOUBLE_DOWN: "falling quickly",
    Trend.NOT_COMPUTABLE: "unable to determine trend",
    Trend.RATE_OUT_OF_RANGE: "trend unavailable",
}


class GlucoseReading(BaseModel):
    """A single glucose reading as returned by the Share service."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    value: int = Field(..., alias="Value", description="Glucose value in mg/dL")
    trend: Trend = Field(..., alias="Trend", description="Direction of glucose trend")

    @field_validator("value", mode="before")
    @classmethod
    def reject_non_integer_value(cls, value: Any) -> Any:
        """Booleans and fractional numbers are not valid mg/dL values."""
        if isinstance(value, bool):
            raise ValueError("Glucose value must be an integer")
        return value

    @field_validator("trend", mode="before")
    @classmethod
    def decode_trend(cls, value: Any) -> Trend:
        return Trend.from_server(value)

    def __str__(self) -> str:
        return f"{self.value} mg/dL {self.trend.glyph}".rstrip()
