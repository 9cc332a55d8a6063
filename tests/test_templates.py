import pytest

from weather_ai_bot.messages import MessageTemplates
from weather_ai_bot.weather import WeatherReport


SECTION_MARKERS = {
    "current_temp": "Temperature:",
    "humidity": "Humidity:",
    "wind_speed": "Wind Speed:",
    "forecast": "Forecast \\(next 3 days\\)",
    "clothing_suggestions": "What to wear",
    "activity_recommendations": "Activity suggestions",
    "recommendations": "Tips",
}


def test_minimal_summary_has_only_guaranteed_lines(minimal_report):
    message = MessageTemplates.format_summary(minimal_report)

    assert "🌤️ *Weather for Paris*" in message
    assert "Condition: Sunny" in message
    for marker in SECTION_MARKERS.values():
        assert marker not in message


def test_full_summary_sections_in_order(full_report):
    message = MessageTemplates.format_summary(full_report)

    positions = [
        message.index("Weather for Paris"),
        message.index("Temperature: 18\\.5°C"),
        message.index("Condition: Partly cloudy"),
        message.index("💧 Humidity: 64%"),
        message.index("💨 Wind Speed: 12 km/h"),
        message.index("Forecast \\(next 3 days\\)"),
        message.index("What to wear"),
        message.index("Activity suggestions"),
        message.index("Tips"),
    ]
    assert positions == sorted(positions)
    assert "• Light jacket" in message
    assert "• Museum visit" in message
    assert "• Carry an umbrella" in message


def test_summary_forecast_shows_first_three_days(full_report):
    message = MessageTemplates.format_summary(full_report)

    assert "Monday: 20°/12° \\- Sunny" in message
    assert "Tuesday: 19°/11° \\- Cloudy" in message
    assert "Wednesday: 17°/10° \\- Rain" in message
    assert "Thursday" not in message
    assert "Friday" not in message
    assert message.index("Monday") < message.index("Tuesday") < message.index("Wednesday")


def test_full_forecast_shows_every_day(full_report):
    message = MessageTemplates.format_full_forecast(full_report)

    assert message.startswith("📊 *Full Forecast for Paris:*")
    for day in ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]:
        assert day in message
    assert message.count("°/") == 5


@pytest.mark.parametrize("field", ["forecast", "clothing_suggestions", "activity_recommendations"])
def test_empty_lists_are_omitted(full_report_data, field):
    full_report_data[field] = [] if field != "forecast" else None
    report = WeatherReport.model_validate(full_report_data)

    message = MessageTemplates.format_summary(report)

    assert SECTION_MARKERS[field] not in message


def test_empty_tips_are_omitted(full_report_data):
    full_report_data["current_weather"]["recommendations"] = []
    report = WeatherReport.model_validate(full_report_data)

    assert "Tips" not in MessageTemplates.format_summary(report)


def test_zero_values_are_shown(minimal_report_data):
    minimal_report_data["current_weather"].update(current_temp=0, humidity=0, wind_speed=0)
    report = WeatherReport.model_validate(minimal_report_data)

    message = MessageTemplates.format_summary(report)

    assert "Temperature: 0°C" in message
    assert "Humidity: 0%" in message
    assert "Wind Speed: 0 km/h" in message


def test_dynamic_text_is_escaped(minimal_report_data):
    minimal_report_data["current_weather"]["location"] = "St. Louis (MO)"
    minimal_report_data["current_weather"]["condition"] = "Light rain - clearing!"
    report = WeatherReport.model_validate(minimal_report_data)

    message = MessageTemplates.format_summary(report)

    assert "Weather for St\\. Louis \\(MO\\)" in message
    assert "Condition: Light rain \\- clearing\\!" in message


@pytest.mark.parametrize("value, expected", [
    (21.0, "21"),
    (21.5, "21\\.5"),
    (-3, "\\-3"),
    (0, "0"),
])
def test_format_number(value, expected):
    assert MessageTemplates.format_number(value) == expected


def test_format_day_today_and_tomorrow(full_report):
    today = MessageTemplates.format_day(full_report, 0)
    tomorrow = MessageTemplates.format_day(full_report, 1)

    assert today == (
        "🌤️ *Today's Forecast for Paris:*\n"
        "High: 20°C\n"
        "Low: 12°C\n"
        "Condition: Sunny"
    )
    assert tomorrow.startswith("📅 *Tomorrow's Forecast for Paris:*")
    assert "Condition: Cloudy" in tomorrow


def test_format_day_out_of_range(full_report, minimal_report):
    assert MessageTemplates.format_day(full_report, 5) is None
    assert MessageTemplates.format_day(full_report, -1) is None
    assert MessageTemplates.format_day(minimal_report, 0) is None


def test_format_forecast_limit(full_report):
    message = MessageTemplates.format_forecast(full_report, 3)

    assert message.startswith("🔮 *3\\-Day Forecast for Paris:*")
    assert "Wednesday" in message
    assert "Thursday" not in message


def test_format_forecast_limit_longer_than_forecast(full_report):
    message = MessageTemplates.format_forecast(full_report, 7)

    assert message.count("°/") == 5


def test_clothing_and_activities(full_report):
    clothing = MessageTemplates.format_clothing(full_report)
    activities = MessageTemplates.format_activities(full_report)

    assert clothing == "🧥 *Clothing Tips for Paris:*\n\n• Light jacket\n• Comfortable shoes"
    assert activities == "🎯 *Activity Suggestions for Paris:*\n\n• Museum visit\n• Evening walk"


def test_narrow_views_without_data(minimal_report):
    assert MessageTemplates.format_forecast(minimal_report, 3) is None
    assert MessageTemplates.format_full_forecast(minimal_report) is None
    assert MessageTemplates.format_clothing(minimal_report) is None
    assert MessageTemplates.format_activities(minimal_report) is None


def test_escape_markdown():
    assert MessageTemplates.escape_markdown("a_b*c") == "a\\_b\\*c"
    assert MessageTemplates.escape_markdown("") == ""


def test_escape_markdown_covers_every_special_character():
    escaped = MessageTemplates.escape_markdown(MessageTemplates.ESCAPE_CHARS)

    assert escaped == "".join(f"\\{char}" for char in MessageTemplates.ESCAPE_CHARS)


def test_short_message_is_not_split(full_report):
    message = MessageTemplates.format_summary(full_report)

    assert MessageTemplates.split_message(message) == [message]


def test_split_message_breaks_between_lines():
    lines = [f"• line {n}" for n in range(10)]

    chunks = MessageTemplates.split_message("\n".join(lines), limit=40)

    assert all(len(chunk) <= 40 for chunk in chunks)
    assert "\n".join(chunks) == "\n".join(lines)
    assert len(chunks) > 1


def test_split_message_shortens_overlong_line():
    chunks = MessageTemplates.split_message("a" * 30 + "\n" + "b" * 10, limit=21)

    assert chunks == ["a" * 20 + "…", "b" * 10]


def test_split_message_does_not_leave_dangling_escape():
    chunks = MessageTemplates.split_message("a" * 18 + "\\.c", limit=20)

    assert chunks == ["a" * 18 + "…"]
