"""
Prompt construction for the weather model.
"""

WEATHER_PROMPT = """You are Weather Assistant AI. Given the user's location and preferences,
provide current weather information and helpful recommendations.

Return ONLY valid JSON that matches this shape:
{{
"current_weather": {{
"location": string,
"current_temp"?: number,
"condition": string,
"humidity"?: integer 0-100,
"wind_speed"?: number >= 0,
"recommendations"?: string[]
}},
"forecast"?: [
{{"date": string, "high_temp": number, "low_temp": number, "condition": string}}
] (1 to 7 days, starting today),
"clothing_suggestions"?: string[],
"activity_recommendations"?: string[]
}}

Location: {location}
Preferences: {preferences}
Date: today

Do not include extra keys or prose. Output valid JSON only."""


class EmptyLocation(ValueError):
    """A weather request was made without a location."""


def build_prompt(location: str, preferences: str = "") -> str:
    """
    Build the instruction prompt for one request.

    Args:
        location: Location text, must not be empty
        preferences: Free-form user preferences, may be empty

    Returns:
        Prompt text demanding JSON-only output
    """
    location = (location or "").strip()
    if not location:
        raise EmptyLocation("location is required")

    return WEATHER_PROMPT.format(
        location=location,
        preferences=(preferences or "").strip()
    )
