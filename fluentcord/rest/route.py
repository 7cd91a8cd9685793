from typing import Final, Sequence, final

import attr

from .errors import ConfigurationMismatchError, MissingIdentifierError
from .reference import Reference, ReferenceState

__all__ = (
    "BASE_URL",
    "USER_PLACEHOLDER",
    "GUILD_PLACEHOLDER",
    "Route",
    "build_url",
    "absolute_url",
    "substitute",
)

BASE_URL: Final[str] = "https://discord.com/api/v10"

USER_PLACEHOLDER: Final[str] = "@user"
GUILD_PLACEHOLDER: Final[str] = "@guild"


@final
@attr.define(frozen=True)
class Route:
    """A resolved request: the HTTP method and the absolute URL that
    the client will call.
    """

    method: str = attr.field()
    """ HTTP method the request will take """

    url: str = attr.field()
    """ The absolute URL, with all placeholders substituted """


def build_url(base: str, segments: Sequence[str]) -> str:
    return f"{base.rstrip('/')}/{'/'.join(segments)}"


def absolute_url(base: str, uri: str) -> str:
    """Returns ``uri`` unchanged when it is already absolute, otherwise
    appends it to ``base``.
    """

    if uri.startswith(("http://", "https://")):
        return uri
    return f"{base.rstrip('/')}/{uri.lstrip('/')}"


def substitute(uri: str, placeholder: str, reference: Reference, what: str) -> str:
    """Replaces every ``placeholder`` in ``uri`` with the reference's
    value.

    Parameters
    ----------
    uri : builtins.str
        The URI being resolved.
    placeholder : builtins.str
        The literal token to replace, e.g. ``@user``.
    reference : fluentcord.rest.reference.Reference
        The identifier. An unset reference leaves ``uri`` untouched.
    what : builtins.str
        Human readable name of the identifier, used in error messages.

    Raises
    ------
    fluentcord.rest.errors.MissingIdentifierError
        The identifier was requested but none could be found.
    fluentcord.rest.errors.ConfigurationMismatchError
        ``uri`` does not contain ``placeholder``.

    Returns
    -------
    builtins.str
        The substituted URI.
    """

    if not reference.requested:
        return uri

    if reference.state is ReferenceState.MISSING:
        raise MissingIdentifierError(
            f"API call requested {what} parameter, but no {what} was provided or found."
        )

    if placeholder not in uri:
        raise ConfigurationMismatchError(
            f"API call attempted to set {what} ID, but requested path does not require a {what}."
        )

    return uri.replace(placeholder, reference.value)  # type: ignore
