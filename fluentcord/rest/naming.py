from typing import List

__all__ = ("split_name",)


def split_name(name: str) -> List[str]:
    """Splits a call name into lowercase path segments.

    A new segment starts before every uppercase letter and at every
    underscore, so ``guildMember`` and ``guild_member`` both become
    ``["guild", "member"]``. Consecutive capitals are split one letter
    at a time (``guildID`` -> ``["guild", "i", "d"]``).

    Parameters
    ----------
    name : builtins.str
        The attribute name that was called on the builder.

    Returns
    -------
    typing.List[builtins.str]
        The segments, in order. Empty fragments are dropped.
    """

    segments: List[str] = []
    current = ""

    for char in name:
        if char == "_" or char.isupper():
            if current:
                segments.append(current)
            current = "" if char == "_" else char.lower()
        else:
            current += char

    if current:
        segments.append(current)

    return segments
