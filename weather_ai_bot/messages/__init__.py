"""Message formatting module for the Weather Bot."""

from .templates import MessageTemplates

__all__ = ["MessageTemplates"]
