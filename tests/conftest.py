from unittest.mock import AsyncMock, MagicMock

import pytest

from fluentcord.config import DiscordSettings
from fluentcord.facade import Discord
from fluentcord.rest.builders import AppRequestBuilder
from fluentcord.rest.client import RESTClient
from fluentcord.rest.errors import ErrorPolicy
from fluentcord.rest.response import Response


@pytest.fixture
def http():
    client = MagicMock(spec=RESTClient)
    client.request = AsyncMock(return_value=Response(200, '{"id": "42"}'))
    return client


@pytest.fixture
def settings():
    return DiscordSettings(
        TOKEN="app-token", GUILD_ID="999", ERROR_POLICY=ErrorPolicy.RAISE
    )


@pytest.fixture
def discord(http, settings):
    return Discord(http=http, settings=settings)


@pytest.fixture
def builder(http):
    return AppRequestBuilder(
        token="app-token",
        http=http,
        default_guild="999",
        error_policy=ErrorPolicy.RAISE,
    )
