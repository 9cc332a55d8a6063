"""
Message templates for weather replies.
Uses MarkdownV2 format for Telegram.
"""

import re
from typing import Optional, List

from ..weather.schema import WeatherReport, ForecastDay


class MessageTemplates:
    """
    Message template formatter for Telegram replies.

    All templates use MarkdownV2 format which requires escaping special characters.
    Renderers for optional data return None when there is nothing to show.
    """

    # Characters that need to be escaped in MarkdownV2
    ESCAPE_CHARS = '_*[]()~`>#+-=|{}.!\\'
    _ESCAPE_PATTERN = re.compile(f"([{re.escape(ESCAPE_CHARS)}])")

    # Telegram's limit for one text message, in UTF-16 code units
    MESSAGE_LIMIT = 4096

    SUMMARY_FORECAST_DAYS = 3

    @classmethod
    def escape_markdown(cls, text: str) -> str:
        """
        Escape special characters for MarkdownV2.

        Args:
            text: Raw text to escape

        Returns:
            Escaped text safe for MarkdownV2
        """
        if not text:
            return ""
        return cls._ESCAPE_PATTERN.sub(r'\\\1', str(text))

    @staticmethod
    def _length(text: str) -> int:
        return len(text.encode("utf-16-le")) // 2

    @classmethod
    def _fit_line(cls, line: str, limit: int) -> str:
        if cls._length(line) <= limit:
            return line

        cut = line[:limit - 1]
        while cls._length(cut) > limit - 1:
            cut = cut[:-1]
        # A dangling backslash would escape the ellipsis
        return cut.rstrip("\\") + "…"

    @classmethod
    def split_message(cls, text: str, limit: int = MESSAGE_LIMIT) -> List[str]:
        """
        Split a formatted message into chunks Telegram accepts.

        Chunks break between lines, so MarkdownV2 entities stay intact.
        A single line longer than the limit is shortened with an ellipsis.

        Args:
            text: Formatted MarkdownV2 message
            limit: Maximum chunk length

        Returns:
            At least one chunk, in order
        """
        chunks = []
        current = ""
        for line in text.split("\n"):
            line = cls._fit_line(line, limit)
            candidate = f"{current}\n{line}" if current else line
            if current and cls._length(candidate) > limit:
                chunks.append(current)
                current = line
            else:
                current = candidate

        if current or not chunks:
            chunks.append(current)
        return chunks

    @classmethod
    def format_number(cls, value: float) -> str:
        """Render 21.0 as "21" and 21.5 as "21.5", escaped."""
        if float(value).is_integer():
            return cls.escape_markdown(str(int(value)))
        return cls.escape_markdown(f"{value:g}")

    @classmethod
    def _bullets(cls, items: List[str]) -> str:
        return "\n".join(f"• {cls.escape_markdown(item)}" for item in items)

    @classmethod
    def _forecast_line(cls, day: ForecastDay) -> str:
        return (
            f"{cls.escape_markdown(day.date)}: "
            f"{cls.format_number(day.high_temp)}°/{cls.format_number(day.low_temp)}° \\- "
            f"{cls.escape_markdown(day.condition)}"
        )

    @classmethod
    def _forecast_lines(cls, days: List[ForecastDay]) -> str:
        return "\n".join(cls._forecast_line(day) for day in days)

    @classmethod
    def _location(cls, report: WeatherReport) -> str:
        return cls.escape_markdown(report.current_weather.location)

    @classmethod
    def format_summary(cls, report: WeatherReport) -> str:
        """
        Format the full weather summary sent for a /weather request.

        Sections whose data is absent or empty are left out entirely;
        the header and the condition line are always present.

        Args:
            report: Validated weather report

        Returns:
            Formatted MarkdownV2 message
        """
        current = report.current_weather

        lines = [f"🌤️ *Weather for {cls._location(report)}*", ""]

        lines.append("🌡️ *Current Conditions:*")
        if current.current_temp is not None:
            lines.append(f"Temperature: {cls.format_number(current.current_temp)}°C")
        lines.append(f"Condition: {cls.escape_markdown(current.condition)}")
        if current.humidity is not None:
            lines.append(f"💧 Humidity: {current.humidity}%")
        if current.wind_speed is not None:
            lines.append(f"💨 Wind Speed: {cls.format_number(current.wind_speed)} km/h")

        if report.forecast:
            lines.append("")
            lines.append(f"📅 *Forecast \\(next {cls.SUMMARY_FORECAST_DAYS} days\\):*")
            lines.append(cls._forecast_lines(report.forecast[:cls.SUMMARY_FORECAST_DAYS]))

        if report.clothing_suggestions:
            lines.append("")
            lines.append("👕 *What to wear:*")
            lines.append(cls._bullets(report.clothing_suggestions))

        if report.activity_recommendations:
            lines.append("")
            lines.append("🎯 *Activity suggestions:*")
            lines.append(cls._bullets(report.activity_recommendations))

        if current.recommendations:
            lines.append("")
            lines.append("💡 *Tips:*")
            lines.append(cls._bullets(current.recommendations))

        return "\n".join(lines)

    @classmethod
    def format_day(cls, report: WeatherReport, index: int) -> Optional[str]:
        """
        Format a single forecast day.

        Args:
            report: Validated weather report
            index: 0 for today, 1 for tomorrow, and so on

        Returns:
            Formatted message or None if the day is not in the forecast
        """
        if not report.forecast or not 0 <= index < len(report.forecast):
            return None

        day = report.forecast[index]
        if index == 0:
            title = f"🌤️ *Today's Forecast for {cls._location(report)}:*"
        elif index == 1:
            title = f"📅 *Tomorrow's Forecast for {cls._location(report)}:*"
        else:
            title = f"📅 *Forecast for {cls._location(report)}, {cls.escape_markdown(day.date)}:*"

        return (
            f"{title}\n"
            f"High: {cls.format_number(day.high_temp)}°C\n"
            f"Low: {cls.format_number(day.low_temp)}°C\n"
            f"Condition: {cls.escape_markdown(day.condition)}"
        )

    @classmethod
    def format_forecast(cls, report: WeatherReport, limit: int) -> Optional[str]:
        """Format the first `limit` forecast days."""
        if not report.forecast or limit < 1:
            return None

        return (
            f"🔮 *{limit}\\-Day Forecast for {cls._location(report)}:*\n\n"
            f"{cls._forecast_lines(report.forecast[:limit])}"
        )

    @classmethod
    def format_full_forecast(cls, report: WeatherReport) -> Optional[str]:
        """Format every forecast day."""
        if not report.forecast:
            return None

        return (
            f"📊 *Full Forecast for {cls._location(report)}:*\n\n"
            f"{cls._forecast_lines(report.forecast)}"
        )

    @classmethod
    def format_clothing(cls, report: WeatherReport) -> Optional[str]:
        if not report.clothing_suggestions:
            return None

        return (
            f"🧥 *Clothing Tips for {cls._location(report)}:*\n\n"
            f"{cls._bullets(report.clothing_suggestions)}"
        )

    @classmethod
    def format_activities(cls, report: WeatherReport) -> Optional[str]:
        if not report.activity_recommendations:
            return None

        return (
            f"🎯 *Activity Suggestions for {cls._location(report)}:*\n\n"
            f"{cls._bullets(report.activity_recommendations)}"
        )

    @classmethod
    def format_welcome_message(cls) -> str:
        """Format /start message."""
        return """🌤️ *Weather Bot is ready\\!*

*Commands:*
• /weather location \\- Get current weather
• /weather location, preferences \\- Get personalized weather info
• /w location \\- Short form
• /help \\- Show help

*Examples:*
• /weather Paris
• /weather Tokyo, outdoor sports
• /weather London, business meeting"""

    @classmethod
    def format_help_message(cls) -> str:
        """Format /help message."""
        return """🌤️ *Weather Bot Help*

Send /weather followed by a location\\. Add preferences after a comma, semicolon or pipe to get tailored clothing and activity tips\\.

*Examples:*
• /weather New York
• /weather London, running
• /weather Tokyo, business casual

Use the buttons under a forecast for today, tomorrow, 3 days, clothing, activities or the full forecast\\."""

    @classmethod
    def format_usage_hint(cls) -> str:
        """Format reply for a weather request without a location."""
        return """🌤️ Please provide a location\\!

Examples:
• /weather New York
• /weather London, outdoor activities
• /weather Tokyo, running"""

    @classmethod
    def format_fetch_failed(cls) -> str:
        return "❌ Sorry, I couldn't get weather information right now\\. Please try again\\."

    @classmethod
    def format_option_failed(cls) -> str:
        return "❌ Could not fetch info for that option\\. Please try again\\."
