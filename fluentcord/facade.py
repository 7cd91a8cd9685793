from typing import Any, Dict, Final, Mapping, Optional

import attr

from .config import DiscordSettings
from .rest.builders import AppRequestBuilder, UserRequestBuilder
from .rest.client import RESTClient
from .rest.errors import UsageError, report

__all__ = ("SESSION_TOKEN_KEY", "Discord")

SESSION_TOKEN_KEY: Final[str] = "_discord_oauth_token"
""" Session key holding the logged in user's OAuth token """


@attr.define(kw_only=True)
class Discord:
    """Entry point for building API calls, either as the application
    or as the user of the current session.
    """

    http: RESTClient = attr.field()
    """ The client every builder sends its request through """

    settings: DiscordSettings = attr.field()
    """ Application token, default guild and error policy """

    session: Optional[Mapping[str, Any]] = attr.field(default=None, repr=False)
    """ The current authenticated session, if there is one """

    def as_app(self) -> AppRequestBuilder:
        return AppRequestBuilder(token=self.settings.TOKEN, **self._options())

    def as_user(self, token: Optional[str] = None) -> UserRequestBuilder:
        """Builds a call made with a user's OAuth token.

        Parameters
        ----------
        token : typing.Optional[builtins.str]
            The token to use, defaults to the one stored in the
            session.

        Raises
        ------
        aiohttp.web.HTTPInternalServerError
            No token was passed and the session has none, under the
            ``ABORT`` policy (``UsageError`` under ``RAISE``).

        Returns
        -------
        fluentcord.rest.builders.UserRequestBuilder
        """

        if token is None and self.session is not None:
            token = self.session.get(SESSION_TOKEN_KEY)

        if token is None:
            report(
                UsageError(
                    "Cannot access Discord API as user without an authenticated session."
                ),
                policy=self.settings.ERROR_POLICY,
            )

        return UserRequestBuilder(token=token, **self._options())

    def _options(self) -> Dict[str, Any]:
        return {
            "http": self.http,
            "session": self.session,
            "default_guild": self.settings.GUILD_ID,
            "base_url": self.settings.API_URL,
            "error_policy": self.settings.ERROR_POLICY,
        }
