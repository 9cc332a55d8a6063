"""Weather schema, prompt building and model client module."""

from .schema import (
    WeatherInfo,
    ForecastDay,
    WeatherReport,
    WeatherFetchFailed,
    SchemaViolation,
    validate,
    validate_json,
)
from .prompts import EmptyLocation, build_prompt
from .fireworks import FireworksClient, GenerationFailure

__all__ = [
    "WeatherInfo",
    "ForecastDay",
    "WeatherReport",
    "WeatherFetchFailed",
    "SchemaViolation",
    "validate",
    "validate_json",
    "EmptyLocation",
    "build_prompt",
    "FireworksClient",
    "GenerationFailure",
]
