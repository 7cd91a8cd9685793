import pytest
from aiohttp import web
from structlog.testing import capture_logs

from fluentcord.facade import SESSION_TOKEN_KEY, Discord
from fluentcord.rest.builders import AppRequestBuilder, UserRequestBuilder
from fluentcord.rest.errors import ErrorPolicy, UsageError


def test_as_app(discord, http):
    builder = discord.as_app()

    assert isinstance(builder, AppRequestBuilder)
    assert builder._token == "app-token"
    assert builder._http is http
    assert builder._default_guild == "999"
    assert builder._error_policy is ErrorPolicy.RAISE


def test_as_app_builders_are_independent(discord):
    first = discord.as_app().users()
    second = discord.as_app()

    assert first is not second
    assert second._path_segments == []


def test_as_user_with_token(discord):
    builder = discord.as_user("user-token")

    assert isinstance(builder, UserRequestBuilder)
    assert builder._token == "user-token"


def test_as_user_from_session(http, settings):
    discord = Discord(
        http=http,
        settings=settings,
        session={SESSION_TOKEN_KEY: "session-token", "discord_id": "55"},
    )
    builder = discord.as_user()

    assert builder._token == "session-token"
    assert builder.users().user().get_uri().endswith("/users/55")


@pytest.mark.parametrize("session", [None, {"discord_id": "55"}])
def test_as_user_without_session(http, settings, session):
    discord = Discord(http=http, settings=settings, session=session)

    with capture_logs() as logs:
        with pytest.raises(UsageError):
            discord.as_user()

    assert "authenticated session" in logs[0]["event"]


def test_as_user_without_session_aborts(http, settings):
    settings.ERROR_POLICY = ErrorPolicy.ABORT
    discord = Discord(http=http, settings=settings)

    with capture_logs():
        with pytest.raises(web.HTTPInternalServerError):
            discord.as_user()
