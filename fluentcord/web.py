"""aiohttp application integration.

``setup`` shares one HTTP session between all builders made while the
application runs; ``discord_for`` returns a factory bound to the request
being served. An authentication middleware is expected to store the
user's session mapping on the request under ``SESSION_KEY``.
"""

from typing import AsyncIterator, Final, Optional

import aiohttp
from aiohttp import web

from .config import DiscordSettings
from .facade import Discord
from .rest.client import RESTClient

__all__ = ("SESSION_KEY", "HTTP_KEY", "SETTINGS_KEY", "setup", "discord_for")

SESSION_KEY: Final[str] = "discord_session"

HTTP_KEY = web.AppKey("discord_http", RESTClient)
SETTINGS_KEY = web.AppKey("discord_settings", DiscordSettings)


async def _http_client(app: web.Application) -> AsyncIterator[None]:
    async with aiohttp.ClientSession() as session:
        app[HTTP_KEY] = RESTClient(session=session)
        yield


def setup(app: web.Application, settings: Optional[DiscordSettings] = None) -> None:
    app[SETTINGS_KEY] = settings if settings is not None else DiscordSettings()
    app.cleanup_ctx.append(_http_client)


def discord_for(request: web.Request) -> Discord:
    return Discord(
        http=request.app[HTTP_KEY],
        settings=request.app[SETTINGS_KEY],
        session=request.get(SESSION_KEY),
    )
