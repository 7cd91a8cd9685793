import attr
import pytest
from aiohttp import web
from structlog.testing import capture_logs

from fluentcord.rest.builders import AppRequestBuilder, UserRequestBuilder
from fluentcord.rest.errors import (
    ConfigurationMismatchError,
    ErrorPolicy,
    MissingIdentifierError,
    UsageError,
)
from fluentcord.rest.naming import split_name
from fluentcord.rest.route import BASE_URL


@pytest.mark.parametrize("method", ["get", "post", "put"])
def test_set_method_allowed(builder, method):
    assert builder.set_method(method) is builder
    assert builder.get_method() == method


@pytest.mark.parametrize("method", ["delete", "patch", "GET", "Post", ""])
def test_set_method_rejected(builder, method):
    with capture_logs() as logs:
        with pytest.raises(UsageError):
            builder.set_method(method)

    assert method in logs[0]["event"]
    assert builder.get_method() == "get"


def test_method_defaults_to_get(builder):
    assert builder.get_method() == "get"


def test_chained_names_become_path_segments(builder):
    assert builder.guildMember().roles() is builder
    assert builder._path_segments == ["guild", "member", "roles"]
    assert builder.get_uri() == BASE_URL + "/guild/member/roles"


def test_chained_call_arguments_are_ignored(builder):
    builder.channels("123").messages(limit=5)
    assert builder._path_segments == ["channels", "messages"]


def test_snake_case_names_segment_like_camel_case(builder):
    builder.audit_logs()
    assert builder._path_segments == ["audit", "logs"]


def test_segment_appends_explicitly(builder):
    builder.segment("users", "@me").guilds()
    assert builder.get_uri() == BASE_URL + "/users/@me/guilds"


def test_private_names_are_not_path_data(builder):
    with pytest.raises(AttributeError):
        builder._missing


def test_uri_is_resolved_once(builder):
    builder.users().user("1")
    first = builder.get_uri()

    builder.roles()
    builder.user("2")

    assert builder.get_uri() == first == BASE_URL + "/users/1"


def test_user_substitution_in_override(builder):
    builder.set_uri("/users/@user/profile").user("123")
    assert builder.get_uri() == BASE_URL + "/users/123/profile"


def test_user_without_placeholder_in_override(builder):
    builder.set_uri("/users/@me").user("123")

    with capture_logs():
        with pytest.raises(ConfigurationMismatchError):
            builder.get_uri()


def test_guild_without_placeholder_in_override(builder):
    builder.set_uri("/users/@me/guilds").guild()

    with capture_logs():
        with pytest.raises(ConfigurationMismatchError):
            builder.get_uri()


def test_user_without_session_fails_at_resolution(builder):
    assert builder.users().user() is builder

    with capture_logs() as logs:
        with pytest.raises(MissingIdentifierError):
            builder.get_uri()

    assert logs[0]["error_type"] == "MissingIdentifierError"


def test_user_from_session(http):
    builder = UserRequestBuilder(
        token="user-token",
        http=http,
        session={"discord_id": "77"},
        error_policy=ErrorPolicy.RAISE,
    )
    builder.users().user()
    assert builder.get_uri() == BASE_URL + "/users/77"


def test_user_accepts_integer_snowflake(builder):
    builder.users().user(80351110224678912)
    assert builder.get_uri() == BASE_URL + "/users/80351110224678912"


def test_guild_without_default_fails_at_resolution(http):
    builder = AppRequestBuilder(token="t", http=http, error_policy=ErrorPolicy.RAISE)
    builder.guilds().guild()

    with capture_logs():
        with pytest.raises(MissingIdentifierError):
            builder.get_uri()


def test_guild_member_scenario(builder):
    builder.guild().member()

    assert builder._path_segments == ["@guild", "member"]
    assert builder.get_uri() == BASE_URL + "/999/member"
    assert builder.get_method() == "get"


def test_guild_and_user_in_one_path(builder):
    builder.guilds().guild().members().user("55")
    assert builder.get_uri() == BASE_URL + "/guilds/999/members/55"


def test_override_scenario(builder):
    builder.guildMember().set_uri("/channels/@user/messages").user("55").set_method("post")

    assert builder._path_segments == []
    assert builder.get_uri() == BASE_URL + "/channels/55/messages"
    assert builder.get_method() == "post"


def test_unrequested_placeholder_is_left_alone(builder):
    builder.set_uri("/channels/@user/messages")
    assert builder.get_uri() == BASE_URL + "/channels/@user/messages"


def test_token_is_fixed(builder):
    with pytest.raises(attr.exceptions.FrozenAttributeError):
        builder._token = "other"


def test_repr_hides_token(builder):
    assert "app-token" not in repr(builder)


def test_abort_policy(http):
    builder = AppRequestBuilder(token="t", http=http)

    with capture_logs():
        with pytest.raises(web.HTTPInternalServerError) as info:
            builder.set_method("delete")

    assert isinstance(info.value.__cause__, UsageError)


@pytest.mark.parametrize(
    "name",
    [
        "token",
        "session",
        "http",
        "default_guild",
        "base_url",
        "error_policy",
        "path_segments",
        "target_uri",
        "user_ref",
        "guild_ref",
        "last_response",
    ],
)
def test_state_names_are_path_data(builder, name):
    assert getattr(builder, name)() is builder
    assert builder._path_segments == split_name(name)


def test_oauth2_token_path(builder):
    builder.oauth2().token()

    assert builder._path_segments == ["oauth2", "token"]
    assert builder.get_uri() == BASE_URL + "/oauth2/token"
