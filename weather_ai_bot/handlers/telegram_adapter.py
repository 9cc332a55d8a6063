"""
python-telegram-bot adapters.
Translates Telegram updates into dispatcher calls and dispatcher replies
into Bot API requests.
"""

import logging
from typing import Optional

from telegram import Bot, Update, InlineKeyboardButton, InlineKeyboardMarkup, LinkPreviewOptions
from telegram.constants import ChatAction, ParseMode
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from .dispatcher import ChatTransport, DeliveryFailed, Keyboard, WeatherDispatcher

logger = logging.getLogger(__name__)


class TelegramTransport(ChatTransport):
    """Sends dispatcher replies through the Telegram Bot API."""

    def __init__(self, bot: Bot):
        self.bot = bot

    async def send_message(
        self,
        chat_id: int,
        text: str,
        keyboard: Optional[Keyboard] = None
    ) -> None:
        reply_markup = None
        if keyboard:
            reply_markup = InlineKeyboardMarkup([
                [InlineKeyboardButton(button.label, callback_data=button.callback_data) for button in row]
                for row in keyboard
            ])

        try:
            await self.bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=ParseMode.MARKDOWN_V2,
                link_preview_options=LinkPreviewOptions(is_disabled=True),
                reply_markup=reply_markup
            )
        except TelegramError as e:
            logger.error(f"Failed to send message to chat {chat_id}: {e}")
            raise DeliveryFailed(str(e)) from e

    async def send_typing(self, chat_id: int) -> None:
        try:
            await self.bot.send_chat_action(chat_id=chat_id, action=ChatAction.TYPING)
        except TelegramError as e:
            raise DeliveryFailed(str(e)) from e

    async def answer_callback(self, callback_id: str) -> None:
        try:
            await self.bot.answer_callback_query(callback_query_id=callback_id)
        except TelegramError as e:
            raise DeliveryFailed(str(e)) from e


class TelegramHandlers:
    """
    Telegram handler callbacks.
    Each callback extracts what the dispatcher needs from the update.
    """

    def __init__(self, dispatcher: WeatherDispatcher):
        """
        Initialize handlers.

        Args:
            dispatcher: Weather dispatcher
        """
        self.dispatcher = dispatcher

    async def start_command(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /start command."""
        chat = update.effective_chat
        await self.dispatcher.handle_start(chat.id)
        logger.info(f"Chat {chat.id} started bot")

    async def help_command(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /help command."""
        await self.dispatcher.handle_help(update.effective_chat.id)

    async def receive_message(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle any text message, including /weather and /w."""
        message = update.effective_message
        if message is None or update.effective_chat is None:
            return

        logger.debug(f"Received from chat {update.effective_chat.id}: {message.text}")
        await self.dispatcher.handle_message(update.effective_chat.id, message.text)

    async def receive_callback(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle inline button presses."""
        query = update.callback_query
        if query is None:
            return

        chat = update.effective_chat
        if chat is None:
            # Message too old to be accessible, nowhere to reply
            await query.answer()
            return

        await self.dispatcher.handle_callback(chat.id, query.id, query.data)

    async def error_handler(
        self,
        update: object,
        context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Log errors raised by handlers; the bot keeps serving other updates."""
        logger.error(
            f"Error while handling update {getattr(update, 'update_id', None)}: {context.error}",
            exc_info=context.error
        )
