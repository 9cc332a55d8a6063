import json

import pytest

from weather_ai_bot.weather import (
    SchemaViolation,
    WeatherFetchFailed,
    WeatherReport,
    validate,
    validate_json,
)
from weather_ai_bot.weather.schema import report_json_schema


def test_validate_full_report(full_report_data):
    report = validate(full_report_data)

    assert isinstance(report, WeatherReport)
    assert report.current_weather.location == "Paris"
    assert report.current_weather.humidity == 64
    assert [day.date for day in report.forecast] == [
        "Monday", "Tuesday", "Wednesday", "Thursday", "Friday"
    ]
    assert report.clothing_suggestions == ["Light jacket", "Comfortable shoes"]


def test_validate_minimal_report(minimal_report_data):
    report = validate(minimal_report_data)

    assert report.current_weather.current_temp is None
    assert report.current_weather.humidity is None
    assert report.forecast is None
    assert report.clothing_suggestions is None
    assert report.activity_recommendations is None


def test_integer_temperatures_are_accepted(minimal_report_data):
    minimal_report_data["current_weather"]["current_temp"] = 21

    report = validate(minimal_report_data)

    assert report.current_weather.current_temp == 21


def test_rejects_humidity_and_empty_forecast_together(full_report_data):
    full_report_data["current_weather"]["humidity"] = 150
    full_report_data["forecast"] = []

    with pytest.raises(SchemaViolation) as exc_info:
        validate(full_report_data)

    assert "current_weather.humidity" in exc_info.value.paths
    assert "forecast" in exc_info.value.paths


def test_schema_violation_is_a_fetch_failure(minimal_report_data):
    minimal_report_data["current_weather"]["humidity"] = -1

    with pytest.raises(WeatherFetchFailed):
        validate(minimal_report_data)


def test_rejects_forecast_longer_than_seven_days(full_report_data):
    day = full_report_data["forecast"][0]
    full_report_data["forecast"] = [dict(day) for _ in range(8)]

    with pytest.raises(SchemaViolation) as exc_info:
        validate(full_report_data)

    assert exc_info.value.paths == ["forecast"]


def test_accepts_seven_day_forecast(full_report_data):
    day = full_report_data["forecast"][0]
    full_report_data["forecast"] = [dict(day) for _ in range(7)]

    assert len(validate(full_report_data).forecast) == 7


def test_rejects_missing_current_weather():
    with pytest.raises(SchemaViolation) as exc_info:
        validate({"forecast": [{"date": "Monday", "high_temp": 1, "low_temp": 0, "condition": "Snow"}]})

    assert exc_info.value.paths == ["current_weather"]


@pytest.mark.parametrize("field, value", [
    ("location", ""),
    ("wind_speed", -0.5),
    ("humidity", 55.5),
    ("humidity", True),
    ("current_temp", "20"),
])
def test_rejects_bad_current_weather_values(minimal_report_data, field, value):
    minimal_report_data["current_weather"][field] = value

    with pytest.raises(SchemaViolation) as exc_info:
        validate(minimal_report_data)

    assert f"current_weather.{field}" in exc_info.value.paths


def test_names_nested_forecast_path(full_report_data):
    del full_report_data["forecast"][1]["high_temp"]

    with pytest.raises(SchemaViolation) as exc_info:
        validate(full_report_data)

    assert exc_info.value.paths == ["forecast.1.high_temp"]


def test_rejects_non_object():
    with pytest.raises(SchemaViolation):
        validate(["not", "a", "report"])


def test_unknown_keys_are_ignored(minimal_report_data):
    minimal_report_data["summary"] = "Nice day"
    minimal_report_data["current_weather"]["uv_index"] = 5

    report = validate(minimal_report_data)

    assert not hasattr(report, "summary")


def test_validate_json_plain(full_report_data):
    report = validate_json(json.dumps(full_report_data))

    assert report.current_weather.condition == "Partly cloudy"


def test_validate_json_tolerates_code_fence(minimal_report_data):
    text = "```json\n" + json.dumps(minimal_report_data) + "\n```"

    report = validate_json(text)

    assert report.current_weather.location == "Paris"


def test_validate_json_rejects_prose():
    with pytest.raises(SchemaViolation) as exc_info:
        validate_json("Sure! Here is the weather in Paris: sunny.")

    assert exc_info.value.paths == ["$"]


def test_json_schema_lists_required_fields():
    schema = report_json_schema()

    assert schema["required"] == ["current_weather"]
    assert "forecast" in schema["properties"]


def test_whole_float_humidity_is_accepted_as_int(minimal_report_data):
    minimal_report_data["current_weather"]["humidity"] = 65.0

    report = validate(minimal_report_data)

    assert report.current_weather.humidity == 65
    assert isinstance(report.current_weather.humidity, int)


def test_numeric_string_humidity_is_rejected(minimal_report_data):
    minimal_report_data["current_weather"]["humidity"] = "65"

    with pytest.raises(SchemaViolation) as exc_info:
        validate(minimal_report_data)

    assert exc_info.value.paths == ["current_weather.humidity"]


def test_validate_json_rejects_nan_and_infinity():
    text = (
        '{"current_weather": {"location": "Paris", "condition": "Sunny", "current_temp": NaN},'
        ' "forecast": [{"date": "Monday", "high_temp": Infinity, "low_temp": -Infinity,'
        ' "condition": "Clear"}]}'
    )

    with pytest.raises(SchemaViolation) as exc_info:
        validate_json(text)

    assert set(exc_info.value.paths) == {
        "current_weather.current_temp",
        "forecast.0.high_temp",
        "forecast.0.low_temp",
    }


def test_rejects_infinite_wind_speed(minimal_report_data):
    minimal_report_data["current_weather"]["wind_speed"] = float("inf")

    with pytest.raises(SchemaViolation) as exc_info:
        validate(minimal_report_data)

    assert exc_info.value.paths == ["current_weather.wind_speed"]
