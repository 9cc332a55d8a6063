"""
Weather data contract.
These pydantic models describe the exact JSON shape the language model
must return for a location request.
"""

import json
import re
from typing import Optional, List, Any, Dict

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, ValidationError, field_validator


class WeatherFetchFailed(Exception):
    """Weather data could not be obtained for a request."""


class SchemaViolation(WeatherFetchFailed):
    """
    Model output does not match the WeatherReport shape.

    Attributes:
        paths: Dotted paths of every offending field
            Example: ["current_weather.humidity", "forecast"]
    """

    def __init__(self, paths: List[str], details: Optional[List[str]] = None):
        self.paths = paths
        self.details = details or []
        super().__init__(
            "Schema violation at " + ", ".join(paths)
            + (f" ({'; '.join(self.details)})" if self.details else "")
        )


class _Contract(BaseModel):
    # Unknown keys from the model are dropped; NaN and Infinity are not numbers
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)


class WeatherInfo(_Contract):
    """
    Current conditions for the requested location.

    Attributes:
        location: Resolved location name
            Example: "Paris, France"
        current_temp: Temperature in Celsius
            Example: 18.5
        condition: Short sky/precipitation description
            Example: "Partly cloudy"
        humidity: Relative humidity percentage (0-100)
        wind_speed: Wind speed in km/h
        recommendations: Free-form tips for the day
    """
    location: str = Field(min_length=1)
    current_temp: Optional[StrictFloat] = None
    condition: str
    humidity: Optional[StrictInt] = Field(default=None, ge=0, le=100)
    wind_speed: Optional[StrictFloat] = Field(default=None, ge=0)
    recommendations: Optional[List[str]] = None

    @field_validator("humidity", mode="before")
    @classmethod
    def coerce_whole_float_humidity(cls, value: Any) -> Any:
        # 65.0 is the integer 65 in JSON; 55.5 still fails the strict check
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


class ForecastDay(_Contract):
    """A single forecast day."""
    date: str
    high_temp: StrictFloat
    low_temp: StrictFloat
    condition: str


class WeatherReport(_Contract):
    """
    Root object returned by the model for one request.

    A report lives only for the duration of a single reply; it is
    never stored.
    """
    current_weather: WeatherInfo
    forecast: Optional[List[ForecastDay]] = Field(default=None, min_length=1, max_length=7)
    clothing_suggestions: Optional[List[str]] = None
    activity_recommendations: Optional[List[str]] = None


_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def _error_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "$"


def validate(candidate: Any) -> WeatherReport:
    """
    Validate a parsed JSON value against the WeatherReport contract.

    Args:
        candidate: Parsed JSON (normally a dict)

    Returns:
        Validated WeatherReport

    Raises:
        SchemaViolation: naming every offending field path
    """
    try:
        return WeatherReport.model_validate(candidate)
    except ValidationError as e:
        paths = []
        details = []
        for error in e.errors():
            path = _error_path(error["loc"])
            if path not in paths:
                paths.append(path)
            details.append(f"{path}: {error['msg']}")
        raise SchemaViolation(paths, details) from e


def validate_json(text: str) -> WeatherReport:
    """
    Parse raw model output and validate it.
    A Markdown code fence around the JSON is tolerated.
    """
    raw = (text or "").strip()
    fenced = _CODE_FENCE.match(raw)
    if fenced:
        raw = fenced.group(1)

    try:
        candidate = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SchemaViolation(["$"], [f"invalid JSON: {e.msg}"]) from e

    return validate(candidate)


def report_json_schema() -> Dict[str, Any]:
    """JSON Schema of WeatherReport, sent along with the model request."""
    return WeatherReport.model_json_schema()
