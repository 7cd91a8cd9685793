import enum
import pprint
from typing import Any, Dict, List, NoReturn, Optional, Tuple, Union

import attr
import structlog
from aiohttp import web

__all__ = (
    "FluentcordException",
    "UsageError",
    "ConfigurationMismatchError",
    "MissingIdentifierError",
    "TransportError",
    "UpstreamApiError",
    "ErrorPolicy",
    "report",
)

logger = structlog.stdlib.get_logger()


class ItemsList(list):
    def items(self):
        for n, item in enumerate(self):
            yield str(n), item


def flatten(
    d: Union[Dict[str, Any], ItemsList], path: Optional[str] = None
) -> List[Tuple[str, Tuple[str, str]]]:
    if path is None:
        path = ""

    items: List[Tuple[str, Tuple[str, str]]] = []
    for k, v in d.items():
        if k == "_errors":
            for item in v:
                items.append((path[1:], (item["message"], item["code"])))
        if isinstance(v, dict):
            items.extend(flatten(v, path + ":" + k))
        elif isinstance(v, list):
            items.extend(flatten(ItemsList(v), path + ":" + k))
    return items


class FluentcordException(Exception):
    """Base class for every error a request builder reports"""


class UsageError(FluentcordException):
    """The builder was used in a way it does not support, e.g. an
    unknown HTTP method or reading a result before a successful call.
    """


class ConfigurationMismatchError(FluentcordException):
    """A user or guild was supplied but the URI has no placeholder
    for it.
    """


class MissingIdentifierError(FluentcordException):
    """A user or guild was requested but none could be found"""


class TransportError(FluentcordException):
    """The HTTP call itself failed before discord answered"""

    def __init__(self, message: str, cause: BaseException):
        self.cause = cause
        super().__init__(message)


@attr.define(init=False, repr=False)
class UpstreamApiError(FluentcordException):
    """Discord answered with anything other than 200. The status code
    and response body are included.
    """

    code: int = attr.field()
    """ The HTTP status code """

    data: Union[str, Dict[str, Any]] = attr.field()
    """ The body of the response, parsed when it was JSON """

    def __init__(self, code: int, data: Union[str, Dict[str, Any]]):
        self.code = code
        self.data = data

        super().__init__(f"Discord API returned non-OK status {code}.")

    @property
    def message(self) -> Optional[str]:
        """Error message sent by discord"""

        if isinstance(self.data, dict):
            return self.data.get("message")

    @property
    def errno(self) -> Optional[int]:
        """The JSON error code discord sent"""

        if isinstance(self.data, dict):
            return self.data.get("code")

    @property
    def errors(self) -> Optional[str]:
        """Returns the prettified field errors, discord nests them by
        field path.
        """

        if isinstance(self.data, dict):
            if "errors" not in self.data:
                return None

            text = "\n".join(
                f"{item} ({code}): {message}"
                for item, (message, code) in flatten(self.data["errors"])
            )
            return text.strip()
        else:
            return self.data

    def __repr__(self) -> str:
        return f"<UpstreamApiError code={self.code} message={self.message!r}>"


class ErrorPolicy(enum.Enum):
    """What happens after an error has been logged"""

    ABORT = "abort"
    """ Abort the surrounding aiohttp request with a 500 """

    RAISE = "raise"
    """ Raise the typed error to the caller """


def render(message: str, *payloads: Any) -> str:
    for payload in payloads:
        message += "\n\t" + pprint.pformat(payload)
    return message


def report(
    exc: FluentcordException,
    *payloads: Any,
    policy: ErrorPolicy = ErrorPolicy.ABORT,
) -> NoReturn:
    """Logs an error with its diagnostic payloads and then stops the
    current call chain. This never returns.

    Parameters
    ----------
    exc : fluentcord.rest.errors.FluentcordException
        The error being reported, its message is logged first.
    *payloads : typing.Any
        Extra values to log, one per line.
    policy : fluentcord.rest.errors.ErrorPolicy
        ``ABORT`` raises ``aiohttp.web.HTTPInternalServerError`` so the
        request being served fails with a 500, ``RAISE`` raises ``exc``.

    Raises
    ------
    aiohttp.web.HTTPInternalServerError
        Under the ``ABORT`` policy.
    fluentcord.rest.errors.FluentcordException
        Under the ``RAISE`` policy.
    """

    logger.error(render(str(exc), *payloads), error_type=type(exc).__name__)

    if policy is ErrorPolicy.RAISE:
        raise exc

    raise web.HTTPInternalServerError() from exc
