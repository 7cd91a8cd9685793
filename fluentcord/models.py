from __future__ import annotations

from typing import Any, Mapping, Optional

import attr

from .facade import Discord
from .rest.builders import AppRequestBuilder, UserRequestBuilder

__all__ = ("DiscordObject", "DiscordUser")


@attr.define(kw_only=True)
class DiscordObject:
    """Base class for objects filled in from an API call"""

    discord: Discord = attr.field(repr=False)
    """ The factory used to build the API calls """

    attributes: Mapping[str, Any] = attr.field(factory=dict)
    """ The raw data discord sent back """

    def app_builder(self) -> AppRequestBuilder:
        return self.discord.as_app()

    def user_builder(self, token: Optional[str] = None) -> UserRequestBuilder:
        return self.discord.as_user(token)


@attr.define(kw_only=True)
class DiscordUser(DiscordObject):
    """A member of the configured guild"""

    id: str = attr.field(converter=str)
    """ The user's snowflake """

    async def hydrate(self) -> DiscordUser:
        """Fetches the guild member record for this user and stores it
        in `attributes`.
        """

        builder = await self.app_builder().guilds().guild().members().user(self.id).execute()
        self.attributes = builder.result()
        return self
