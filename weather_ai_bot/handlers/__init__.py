"""Chat dispatching and Telegram handlers module."""

from .parser import (
    WeatherQuery,
    InvalidCallback,
    parse_weather_command,
    is_weather_request,
    encode_callback,
    decode_callback,
)
from .dispatcher import ChatTransport, DeliveryFailed, InlineButton, WeatherDispatcher
from .telegram_adapter import TelegramTransport, TelegramHandlers

__all__ = [
    "WeatherQuery",
    "InvalidCallback",
    "parse_weather_command",
    "is_weather_request",
    "encode_callback",
    "decode_callback",
    "ChatTransport",
    "DeliveryFailed",
    "InlineButton",
    "WeatherDispatcher",
    "TelegramTransport",
    "TelegramHandlers",
]
