"""Filter expression parser: ``name-or-prefix[*][>N|<N]`` tokens."""

from __future__ import annotations

from trunkdump.dump.models import UNBOUNDED_ABOVE, UNBOUNDED_BELOW, FilterElement


class FilterSyntaxError(ValueError):
    """Raised when a filter token carries a non-integer revision bound."""


def _parse_bound(token: str, text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise FilterSyntaxError(f"invalid revision bound {text!r} in filter {token!r}") from None


def parse_filter_token(token: str) -> FilterElement:
    """Parse *token* into a FilterElement.

    ``foo.txt``     exact name, any revision
    ``src/*``       prefix ``src/``, any revision
    ``foo.txt>5``   exact name, revisions above 5
    ``docs*<10``    prefix ``docs``, revisions below 10

    ``>`` is looked for before ``<``; only one bound is honoured. A bound of
    zero or less leaves the element unbounded.
    """
    name_length = -1
    prefix = False
    above = 0
    below = 0

    star = token.rfind("*")
    if star != -1:
        name_length = star
        prefix = True

    gt = token.rfind(">")
    if gt != -1:
        if name_length == -1:
            name_length = gt
        above = _parse_bound(token, token[gt + 1:])
    else:
        lt = token.rfind("<")
        if lt != -1:
            if name_length == -1:
                name_length = lt
            below = _parse_bound(token, token[lt + 1:])

    if name_length == -1:
        name_length = len(token)

    return FilterElement(
        name=token[:name_length],
        prefix=prefix,
        above=above if above > 0 else UNBOUNDED_ABOVE,
        below=below if below > 0 else UNBOUNDED_BELOW,
    )
