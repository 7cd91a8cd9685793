from __future__ import annotations

import enum
from typing import Optional, final

import attr

__all__ = ("ReferenceState", "Reference")


class ReferenceState(enum.Enum):
    UNSET = "unset"
    RESOLVED = "resolved"
    MISSING = "missing"


@final
@attr.define(frozen=True)
class Reference:
    """An identifier that a builder substitutes into its URI once it is
    resolved. A reference that was never requested is ``UNSET``, one that
    was requested but could not be found is ``MISSING``.
    """

    state: ReferenceState = attr.field(default=ReferenceState.UNSET)
    """ Which of the three states the reference is in """

    value: Optional[str] = attr.field(default=None)
    """ The identifier, only set when the state is ``RESOLVED`` """

    @classmethod
    def unset(cls) -> Reference:
        return cls()

    @classmethod
    def resolved(cls, value: str) -> Reference:
        return cls(ReferenceState.RESOLVED, str(value))

    @classmethod
    def missing(cls) -> Reference:
        return cls(ReferenceState.MISSING)

    @property
    def requested(self) -> bool:
        """Whether a substitution was asked for at all"""
        return self.state is not ReferenceState.UNSET
