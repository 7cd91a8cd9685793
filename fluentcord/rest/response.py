import json as jsonlib
from typing import Any, final

import attr

__all__ = ("Response",)


@final
@attr.define
class Response:
    """The object that represents the response that discord
    sends back after a HTTP request.
    """

    code: int = attr.field()
    """ The status code of the response """

    data: str = attr.field()
    """ The raw body of the response, use `json` to get the parsed
    data.
    """

    content_type: str = attr.field(default="application/json")
    """ The content-type of the response, without parameters such as
    the charset. Only kept for diagnostics.
    """

    @property
    def ok(self) -> bool:
        """Only a 200 counts as a successful call"""
        return self.code == 200

    def json(self) -> Any:
        """Returns the parsed JSON data of the response, will raise a
        `ValueError` if the body is not JSON. The content type is not
        checked, discord and proxies in front of it are not always
        accurate about it.
        """

        return jsonlib.loads(self.data)
