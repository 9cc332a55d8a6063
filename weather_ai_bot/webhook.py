"""
Webhook HTTP endpoint.
Telegram POSTs update envelopes here; updates are queued for the
python-telegram-bot application and the request is answered at once.
"""

import asyncio
import logging

from aiohttp import web
from telegram import Bot, Update

logger = logging.getLogger(__name__)

LIVENESS_TEXT = "Weather Bot is running!"


def create_webhook_app(bot: Bot, update_queue: asyncio.Queue, path: str) -> web.Application:
    """
    Build the aiohttp application serving the webhook.

    POST /<path> always answers 200 "ok", even for bodies that cannot be
    decoded, so Telegram does not redeliver them. Anything else answers
    200 with a liveness string.

    Args:
        bot: Bot the decoded updates are bound to
        update_queue: Queue consumed by the running Application
        path: Route path, without leading slash
    """
    route = "/" + path.strip("/")

    async def receive_update(request: web.Request) -> web.Response:
        if request.method != "POST":
            return web.Response(text=LIVENESS_TEXT)

        try:
            data = await request.json()
            update = Update.de_json(data, bot)
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning(f"Discarding malformed webhook body: {e}")
            return web.Response(text="ok")

        if update is None:
            logger.warning("Discarding empty webhook body")
            return web.Response(text="ok")

        await update_queue.put(update)
        return web.Response(text="ok")

    async def liveness(request: web.Request) -> web.Response:
        return web.Response(text=LIVENESS_TEXT)

    app = web.Application()
    app.router.add_route("*", route, receive_update)
    app.router.add_route("*", "/{tail:.*}", liveness)
    return app
