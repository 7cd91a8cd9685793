from __future__ import annotations

import asyncio
import json as jsonlib
from typing import (
    Any,
    Callable,
    Dict,
    Final,
    FrozenSet,
    List,
    Mapping,
    NoReturn,
    Optional,
    TypeVar,
    Union,
)

import aiohttp
import attr

from .client import RESTClient
from .errors import (
    ErrorPolicy,
    FluentcordException,
    TransportError,
    UpstreamApiError,
    UsageError,
    report,
)
from .naming import split_name
from .reference import Reference
from .response import Response
from .route import (
    BASE_URL,
    GUILD_PLACEHOLDER,
    USER_PLACEHOLDER,
    Route,
    absolute_url,
    build_url,
    substitute,
)

__all__ = (
    "ALLOWED_METHODS",
    "SESSION_USER_KEY",
    "RequestBuilder",
    "AppRequestBuilder",
    "UserRequestBuilder",
)

ALLOWED_METHODS: Final[FrozenSet[str]] = frozenset({"get", "post", "put"})

SESSION_USER_KEY: Final[str] = "discord_id"
""" Session key holding the logged in user's discord id """

B = TypeVar("B", bound="RequestBuilder")


def _error_body(response: Response) -> Union[str, Dict[str, Any]]:
    try:
        return jsonlib.loads(response.data)
    except jsonlib.JSONDecodeError:
        return response.data


@attr.define(kw_only=True)
class RequestBuilder:
    """Builds one call to discord's REST API from a chain of method
    calls. Any method that is not one of the builder's own becomes
    part of the path, split on camelCase and underscores::

        builder.guilds().guild().members().user("80351110224678912")
        # -> https://discord.com/api/v10/guilds/<guild>/members/80351110224678912

    A builder executes once and is then discarded.
    """

    # state is private, every public name that is not a method is path data
    _token: str = attr.field(repr=False, on_setattr=attr.setters.frozen)
    """ The bearer token sent with the request """

    _http: RESTClient = attr.field()
    """ The client that performs the HTTP call """

    _session: Optional[Mapping[str, Any]] = attr.field(default=None, repr=False)
    """ The current authenticated session, if there is one """

    _default_guild: Optional[str] = attr.field(default=None)
    """ The guild used by `guild` when none is passed """

    _base_url: str = attr.field(default=BASE_URL)
    """ Prefix of every assembled URI """

    _error_policy: ErrorPolicy = attr.field(default=ErrorPolicy.ABORT)
    """ Whether errors abort the surrounding request or are raised """

    _path_segments: List[str] = attr.field(init=False, factory=list)
    _target_uri: Optional[str] = attr.field(init=False, default=None)
    _user_ref: Reference = attr.field(init=False, factory=Reference.unset)
    _guild_ref: Reference = attr.field(init=False, factory=Reference.unset)
    _last_response: Optional[Response] = attr.field(init=False, default=None)

    _override: Optional[str] = attr.field(init=False, default=None)
    _method: Optional[str] = attr.field(init=False, default=None)

    def __getattr__(self, name: str) -> Callable[..., RequestBuilder]:
        # only reached for names that are not builder operations
        if name.startswith("_"):
            raise AttributeError(name)

        def append(*args: Any, **kwargs: Any) -> RequestBuilder:
            return self.segment(*split_name(name))

        return append

    def segment(self: B, *parts: str) -> B:
        """Appends path segments, in order.

        Returns
        -------
        fluentcord.rest.builders.RequestBuilder
            The builder object, can be used for chaining.
        """

        self._path_segments.extend(parts)
        return self

    def user(self: B, user_id: Optional[Union[str, int]] = None) -> B:
        """Sets the user substituted for ``@user`` in the final URI.

        Parameters
        ----------
        user_id : typing.Optional[typing.Union[builtins.str, builtins.int]]
            The discord user ID. When omitted the ID linked to the
            current session is used; if there is none, resolving the
            URI fails later on.

        Returns
        -------
        fluentcord.rest.builders.RequestBuilder
            The builder object, can be used for chaining.
        """

        if user_id is None and self._session is not None:
            user_id = self._session.get(SESSION_USER_KEY)

        self._user_ref = (
            Reference.missing() if user_id is None else Reference.resolved(str(user_id))
        )
        return self._placeholder(USER_PLACEHOLDER)

    def guild(self: B, guild_id: Optional[Union[str, int]] = None) -> B:
        """Sets the guild substituted for ``@guild`` in the final URI,
        falling back to the configured default guild.
        """

        if guild_id is None:
            guild_id = self._default_guild

        self._guild_ref = (
            Reference.missing() if guild_id is None else Reference.resolved(str(guild_id))
        )
        return self._placeholder(GUILD_PLACEHOLDER)

    def set_uri(self: B, uri: str) -> B:
        """Sets a specific URI to call and clears the path chain.
        Placeholders in it are still substituted.
        """

        self._path_segments = []
        self._override = uri
        self._target_uri = None
        return self

    def get_uri(self) -> str:
        """The URI of the request chain, resolved on first read"""

        if self._target_uri is None:
            try:
                self._target_uri = self._build_uri()
            except FluentcordException as exc:
                self.error(exc)
        return self._target_uri

    def set_method(self: B, method: str) -> B:
        if method not in ALLOWED_METHODS:
            self.error(UsageError(f"Attempted to set unallowed API method: {method}"))

        self._method = method
        return self

    def get_method(self) -> str:
        return self._method or "get"

    async def execute(self: B) -> B:
        """Calls the discord API endpoint for the current request chain.

        Raises
        ------
        aiohttp.web.HTTPInternalServerError
            The call failed and the error policy is ``ABORT``.
        fluentcord.rest.errors.FluentcordException
            The call failed and the error policy is ``RAISE``.

        Returns
        -------
        fluentcord.rest.builders.RequestBuilder
            The builder object, can be used for chaining.
        """

        route = Route(self.get_method(), self.get_uri())

        try:
            response = await self._http.request(route=route, token=self._token)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            self.error(TransportError("Fatal execution error.", exc), exc)

        if not response.ok:
            self.error(UpstreamApiError(response.code, _error_body(response)), response.data)

        self._last_response = response
        return self

    def result(self) -> Any:
        """The parsed JSON body of a successful call"""

        response = self._last_response
        if response is None or not response.ok:
            self.error(UsageError("Attempted to get result set on bad or absent API call."))

        try:
            return response.json()
        except ValueError as exc:
            self.error(
                UpstreamApiError(response.code, response.data), response.content_type, exc
            )

    def error(self, exc: FluentcordException, *payloads: Any) -> NoReturn:
        """Logs an error, then aborts or raises depending on the
        builder's error policy.
        """

        report(exc, *payloads, policy=self._error_policy)

    def _placeholder(self: B, token: str) -> B:
        if self._override is None:
            self._path_segments.append(token)
        return self

    def _build_uri(self) -> str:
        if self._override is not None:
            uri = absolute_url(self._base_url, self._override)
        else:
            uri = build_url(self._base_url, self._path_segments)

        uri = substitute(uri, USER_PLACEHOLDER, self._user_ref, "user")
        uri = substitute(uri, GUILD_PLACEHOLDER, self._guild_ref, "guild")
        return uri


@attr.define(kw_only=True)
class AppRequestBuilder(RequestBuilder):
    """Calls the API as the application, with its bot token"""


@attr.define(kw_only=True)
class UserRequestBuilder(RequestBuilder):
    """Calls the API as a user, with their OAuth token"""
