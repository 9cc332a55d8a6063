import copy

import pytest

from weather_ai_bot.weather import WeatherReport

FULL_REPORT = {
    "current_weather": {
        "location": "Paris",
        "current_temp": 18.5,
        "condition": "Partly cloudy",
        "humidity": 64,
        "wind_speed": 12,
        "recommendations": ["Carry an umbrella", "Stay hydrated"],
    },
    "forecast": [
        {"date": "Monday", "high_temp": 20, "low_temp": 12, "condition": "Sunny"},
        {"date": "Tuesday", "high_temp": 19, "low_temp": 11, "condition": "Cloudy"},
        {"date": "Wednesday", "high_temp": 17, "low_temp": 10, "condition": "Rain"},
        {"date": "Thursday", "high_temp": 16, "low_temp": 9, "condition": "Showers"},
        {"date": "Friday", "high_temp": 21, "low_temp": 13, "condition": "Clear"},
    ],
    "clothing_suggestions": ["Light jacket", "Comfortable shoes"],
    "activity_recommendations": ["Museum visit", "Evening walk"],
}

MINIMAL_REPORT = {
    "current_weather": {
        "location": "Paris",
        "condition": "Sunny",
    },
}


@pytest.fixture
def full_report_data():
    return copy.deepcopy(FULL_REPORT)


@pytest.fixture
def minimal_report_data():
    return copy.deepcopy(MINIMAL_REPORT)


@pytest.fixture
def full_report(full_report_data):
    return WeatherReport.model_validate(full_report_data)


@pytest.fixture
def minimal_report(minimal_report_data):
    return WeatherReport.model_validate(minimal_report_data)
