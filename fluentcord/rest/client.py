from typing import Final, Mapping

import aiohttp
import attr
import structlog

from .. import __version__
from .response import Response
from .route import Route

__all__ = ("RESTClient",)

USER_AGENT: Final[
    str
] = f"DiscordBot (https://github.com/fluentcord/fluentcord, {__version__})"

logger = structlog.stdlib.get_logger()


@attr.define(kw_only=True)
class RESTClient:
    """Client that sends single HTTP requests to discord's REST API,
    this does not create a session itself and needs one passed to
    it.
    """

    session: aiohttp.ClientSession = attr.field()
    """ The session that the client uses for its HTTP requests """

    user_agent: str = attr.field(default=USER_AGENT)
    """ The user agent that you want to use for your HTTP client
    (recommended to use this format `DiscordBot ($url, $versionNumber)`)
    """

    def headers(self, token: str) -> Mapping[str, str]:
        return {
            "Authorization": "Bearer " + token,
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    async def request(self, *, route: Route, token: str) -> Response:
        """Makes one HTTP request to the provided `Route`, without a
        body.

        Parameters
        ----------
        route : fluentcord.rest.route.Route
            The method and URL to request.
        token : builtins.str
            The bearer token, either the application's or a user's
            OAuth token.

        Raises
        ------
        aiohttp.ClientError
            The request could not be completed.
        asyncio.TimeoutError
            The session's timeout was reached.

        Returns
        -------
        fluentcord.rest.response.Response
            What discord sent back, whatever the status code.
        """

        logger.debug("discord_request", method=route.method, url=route.url)

        async with self.session.request(
            route.method.upper(), route.url, headers=self.headers(token)
        ) as response:
            text = await response.text(encoding="utf-8", errors="replace")

            return Response(
                response.status,
                data=text,
                content_type=response.content_type,
            )
