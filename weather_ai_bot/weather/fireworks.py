"""
Fireworks AI client.
Asks a chat-completions model for structured weather data and validates
the reply against the WeatherReport contract.
"""

import asyncio
import aiohttp
import logging
from typing import Optional, Dict, Any

from .prompts import build_prompt
from .schema import WeatherReport, WeatherFetchFailed, report_json_schema, validate_json

logger = logging.getLogger(__name__)


class GenerationFailure(WeatherFetchFailed):
    """The model call itself failed (network, auth, rate limit, bad envelope)."""


class FireworksClient:
    """Client for the Fireworks AI chat completions API."""

    COMPLETIONS_PATH = "/chat/completions"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://api.fireworks.ai/inference/v1",
        timeout: float = 60.0,
        temperature: float = 0.3
    ):
        """
        Initialize Fireworks client.

        Args:
            api_key: Fireworks API key
            model: Model identifier
            base_url: API base URL
            timeout: Total timeout of one request in seconds
            temperature: Sampling temperature
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.temperature = temperature
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "temperature": self.temperature,
            "messages": [
                {"role": "user", "content": prompt}
            ],
            "response_format": {
                "type": "json_schema",
                "json_schema": {
                    "name": "WeatherReport",
                    "schema": report_json_schema()
                }
            }
        }

    async def generate_structured(self, prompt: str) -> str:
        """
        Run one completion request and return the raw message content.

        Raises:
            GenerationFailure: on any transport or envelope problem
        """
        session = await self._get_session()
        url = f"{self.base_url}{self.COMPLETIONS_PATH}"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json"
        }

        try:
            async with session.post(url, json=self._build_payload(prompt), headers=headers) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error(
                        f"Fireworks API error: {response.status} - {error_text[:500]}"
                    )
                    raise GenerationFailure(f"model service returned HTTP {response.status}")
                data = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            logger.error(f"Fireworks request failed: {e}")
            raise GenerationFailure(f"model request failed: {e}") from e
        except asyncio.TimeoutError as e:
            logger.error(f"Fireworks request timed out after {self.timeout}s")
            raise GenerationFailure("model request timed out") from e
        except ValueError as e:
            logger.error(f"Fireworks returned a non-JSON body: {e}")
            raise GenerationFailure("model returned a non-JSON response") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected Fireworks response envelope: {str(data)[:500]}")
            raise GenerationFailure("unexpected model response envelope") from e

        if not isinstance(content, str) or not content.strip():
            raise GenerationFailure("model returned empty content")

        return content

    async def fetch_weather(self, location: str, preferences: str = "") -> WeatherReport:
        """
        Get a validated weather report for a location.

        Args:
            location: Location text (non-empty)
            preferences: Optional user preferences

        Returns:
            Validated WeatherReport

        Raises:
            WeatherFetchFailed: GenerationFailure or SchemaViolation
        """
        prompt = build_prompt(location, preferences)
        logger.info(f"Requesting weather for '{location}' (preferences: '{preferences}')")

        content = await self.generate_structured(prompt)

        try:
            report = validate_json(content)
        except WeatherFetchFailed as e:
            logger.error(f"Model output for '{location}' rejected: {e}")
            raise

        logger.debug(f"Weather for '{location}' received: {report.current_weather.condition}")
        return report
