"""
Chat dispatcher.
Routes incoming chat messages and button presses to the weather pipeline
and sends the replies through an injected transport.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol

from ..messages import MessageTemplates
from ..weather import WeatherReport, WeatherFetchFailed
from .parser import (
    InvalidCallback,
    decode_callback,
    encode_callback,
    is_weather_request,
    parse_weather_command,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InlineButton:
    """A button of an inline keyboard."""
    label: str
    callback_data: str


Keyboard = List[List[InlineButton]]


class DeliveryFailed(Exception):
    """The chat platform rejected or could not take an outbound request."""


class ChatTransport(ABC):
    """
    Outbound side of a chat platform.
    Every method raises DeliveryFailed when the platform refuses the request.
    """

    @abstractmethod
    async def send_message(
        self,
        chat_id: int,
        text: str,
        keyboard: Optional[Keyboard] = None
    ) -> None:
        """Send a MarkdownV2 message, optionally with an inline keyboard."""

    @abstractmethod
    async def send_typing(self, chat_id: int) -> None:
        """Show the "typing" indicator."""

    @abstractmethod
    async def answer_callback(self, callback_id: str) -> None:
        """Acknowledge a button press."""


class WeatherSource(Protocol):
    async def fetch_weather(self, location: str, preferences: str = "") -> WeatherReport:
        ...


# Button label and action, one button per keyboard row
WEATHER_BUTTONS = [
    ("🌤 Today", "today"),
    ("📅 Tomorrow", "tomorrow"),
    ("🔮 3 Days", "3days"),
    ("🧥 Clothing Tips", "clothes"),
    ("🎯 Activities", "activities"),
    ("📊 Full Forecast", "forecast"),
]

ACTION_RENDERERS: Dict[str, Callable[[WeatherReport], Optional[str]]] = {
    "today": lambda report: MessageTemplates.format_day(report, 0),
    "tomorrow": lambda report: MessageTemplates.format_day(report, 1),
    "3days": lambda report: MessageTemplates.format_forecast(report, 3),
    "clothes": MessageTemplates.format_clothing,
    "activities": MessageTemplates.format_activities,
    "forecast": MessageTemplates.format_full_forecast,
}


def build_weather_keyboard(location: str) -> Keyboard:
    """Build the six drill-down buttons attached to a weather summary."""
    return [
        [InlineButton(label, encode_callback(action, location))]
        for label, action in WEATHER_BUTTONS
    ]


class WeatherDispatcher:
    """
    Handles one update at a time, without any state between updates.

    Text path: classify, parse, fetch, reply with summary and buttons.
    Callback path: acknowledge, decode, re-fetch, reply with one view.
    """

    def __init__(self, transport: ChatTransport, weather: WeatherSource):
        """
        Initialize the dispatcher.

        Args:
            transport: Outbound chat transport
            weather: Weather report source (model client)
        """
        self.transport = transport
        self.weather = weather

    async def _send_view(self, chat_id: int, text: str, keyboard: Optional[Keyboard] = None) -> None:
        """Send a possibly long message; the keyboard goes on the last chunk."""
        chunks = MessageTemplates.split_message(text)
        for index, chunk in enumerate(chunks):
            if keyboard is not None and index == len(chunks) - 1:
                await self.transport.send_message(chat_id, chunk, keyboard=keyboard)
            else:
                await self.transport.send_message(chat_id, chunk)

    async def _notify(self, chat_id: int, text: str) -> None:
        try:
            await self.transport.send_message(chat_id, text)
        except DeliveryFailed as e:
            logger.error(f"Could not send message to chat {chat_id}: {e}")

    async def handle_start(self, chat_id: int) -> None:
        await self._notify(chat_id, MessageTemplates.format_welcome_message())

    async def handle_help(self, chat_id: int) -> None:
        await self._notify(chat_id, MessageTemplates.format_help_message())

    async def handle_message(self, chat_id: int, text: Optional[str]) -> None:
        """
        Handle a free-text chat message.

        Args:
            chat_id: Originating chat
            text: Message text, may be None for non-text messages
        """
        if not text or not is_weather_request(text):
            return

        query = parse_weather_command(text)
        if not query.location:
            await self._notify(chat_id, MessageTemplates.format_usage_hint())
            return

        try:
            await self.transport.send_typing(chat_id)
        except DeliveryFailed as e:
            logger.warning(f"Typing indicator for chat {chat_id} failed: {e}")

        try:
            report = await self.weather.fetch_weather(query.location, query.preferences)
        except WeatherFetchFailed as e:
            logger.error(f"Weather fetch for '{query.location}' in chat {chat_id} failed: {e}")
            await self._notify(chat_id, MessageTemplates.format_fetch_failed())
            return

        try:
            await self._send_view(
                chat_id,
                MessageTemplates.format_summary(report),
                keyboard=build_weather_keyboard(query.location)
            )
        except DeliveryFailed as e:
            logger.error(f"Could not deliver weather for '{query.location}' to chat {chat_id}: {e}")
            await self._notify(chat_id, MessageTemplates.format_fetch_failed())
            return

        logger.info(f"Sent weather for '{query.location}' to chat {chat_id}")

    async def handle_callback(self, chat_id: int, callback_id: str, data: Optional[str]) -> None:
        """
        Handle an inline button press.

        The callback is always acknowledged first. Nothing is sent when the
        payload is malformed, the action is unknown, or the report lacks
        the requested data.
        """
        try:
            await self.transport.answer_callback(callback_id)
        except DeliveryFailed as e:
            logger.warning(f"Could not answer callback {callback_id}: {e}")

        try:
            action, location = decode_callback(data)
        except InvalidCallback as e:
            logger.warning(str(e))
            return

        renderer = ACTION_RENDERERS.get(action)
        if renderer is None:
            logger.warning(f"Unknown callback action '{action}' from chat {chat_id}")
            return

        try:
            report = await self.weather.fetch_weather(location)
        except WeatherFetchFailed as e:
            logger.error(f"Button fetch '{action}' for '{location}' in chat {chat_id} failed: {e}")
            await self._notify(chat_id, MessageTemplates.format_option_failed())
            return

        message = renderer(report)
        if message is None:
            logger.debug(f"No '{action}' data for '{location}', nothing sent")
            return

        try:
            await self._send_view(chat_id, message)
        except DeliveryFailed as e:
            logger.error(f"Could not deliver '{action}' for '{location}' to chat {chat_id}: {e}")
            await self._notify(chat_id, MessageTemplates.format_option_failed())
