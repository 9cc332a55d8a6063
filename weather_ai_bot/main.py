"""
Main entry point for the Telegram Weather AI Bot.
Initializes all components and starts the bot in polling or webhook mode.
"""

import asyncio
import logging
import signal
from typing import Optional

from aiohttp import web
from telegram import Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    MessageHandler,
    filters
)

from .config import Config
from .weather import FireworksClient
from .handlers import TelegramHandlers, TelegramTransport, WeatherDispatcher
from .webhook import create_webhook_app

logger = logging.getLogger(__name__)


class WeatherAIBot:
    """
    Main bot class that coordinates all components.
    """

    def __init__(self):
        """Initialize the bot."""
        self.weather: FireworksClient = None
        self.dispatcher: WeatherDispatcher = None
        self.application: Application = None
        self._web_runner: Optional[web.AppRunner] = None
        self._running = False

    def initialize(self) -> None:
        """
        Initialize all bot components.
        Config comes from the environment, optionally overridden by CONFIG_PATH TOML.
        """
        Config.load_file()
        Config.setup_logging()
        errors = Config.validate()
        if errors:
            for error in errors:
                logger.error(f"Config error: {error}")
            raise ValueError("Invalid configuration. Check environment variables or CONFIG_PATH file.")

        logger.debug("Initializing Weather AI Bot...")

        self.weather = FireworksClient(
            api_key=Config.FIREWORKS_API_KEY,
            model=Config.FIREWORKS_MODEL,
            base_url=Config.FIREWORKS_BASE_URL,
            timeout=Config.MODEL_TIMEOUT_SECONDS,
            temperature=Config.MODEL_TEMPERATURE
        )

        # Build telegram application; webhook mode feeds updates itself
        builder = (
            Application.builder()
            .token(Config.TELEGRAM_BOT_TOKEN)
            .concurrent_updates(True)
        )
        if Config.BOT_MODE == "webhook":
            builder = builder.updater(None)
        self.application = builder.build()

        self.dispatcher = WeatherDispatcher(
            transport=TelegramTransport(self.application.bot),
            weather=self.weather
        )

        self._setup_handlers()

        logger.debug(f"Weather AI Bot initialized in {Config.BOT_MODE} mode")

    def _setup_handlers(self) -> None:
        """Setup Telegram handlers."""
        handlers = TelegramHandlers(self.dispatcher)

        self.application.add_handler(
            CommandHandler("start", handlers.start_command)
        )
        self.application.add_handler(
            CommandHandler("help", handlers.help_command)
        )
        # Everything else with text, /weather and /w included
        self.application.add_handler(
            MessageHandler(filters.TEXT & filters.UpdateType.MESSAGE, handlers.receive_message)
        )
        self.application.add_handler(
            CallbackQueryHandler(handlers.receive_callback)
        )
        self.application.add_error_handler(handlers.error_handler)

        logger.debug("Handlers registered")

    async def start(self) -> None:
        """Start the bot."""
        if self._running:
            logger.warning("Bot is already running")
            return

        self._running = True
        logger.debug("Starting Weather AI Bot...")

        await self.application.initialize()
        await self.application.start()

        if Config.BOT_MODE == "webhook":
            await self._start_webhook()
        else:
            await self.application.updater.start_polling(
                allowed_updates=Update.ALL_TYPES
            )

        logger.info(f"🌤️ Weather Bot is running ({Config.BOT_MODE})")

        # Keep running until stopped
        while self._running:
            await asyncio.sleep(1)

    async def _start_webhook(self) -> None:
        """Serve the webhook endpoint and register it with Telegram."""
        app = create_webhook_app(
            self.application.bot,
            self.application.update_queue,
            Config.WEBHOOK_PATH
        )
        self._web_runner = web.AppRunner(app)
        await self._web_runner.setup()
        await web.TCPSite(self._web_runner, "0.0.0.0", Config.PORT).start()
        logger.info(f"Server is running on port {Config.PORT}")

        await self.application.bot.set_webhook(
            url=Config.webhook_endpoint(),
            allowed_updates=Update.ALL_TYPES
        )
        logger.debug(f"Webhook registered at {Config.webhook_endpoint()}")

    async def stop(self) -> None:
        """Stop the bot gracefully."""
        logger.debug("Stopping Weather AI Bot...")
        self._running = False

        if self._web_runner:
            await self._web_runner.cleanup()
            self._web_runner = None

        if self.application:
            try:
                if self.application.updater and self.application.updater.running:
                    await self.application.updater.stop()
            except RuntimeError:
                pass
            if self.application.running:
                await self.application.stop()
            await self.application.shutdown()

        # Close model client
        if self.weather:
            await self.weather.close()

        logger.debug("Weather AI Bot stopped")


async def main() -> None:
    """Main entry point."""
    bot = WeatherAIBot()

    # Setup signal handlers for graceful shutdown
    loop = asyncio.get_running_loop()

    def signal_handler():
        logger.debug("Received shutdown signal")
        bot._running = False

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        bot.initialize()
        await bot.start()
    except KeyboardInterrupt:
        logger.debug("Interrupted by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise
    finally:
        await bot.stop()


def run() -> None:
    """Run the bot (blocking)."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
