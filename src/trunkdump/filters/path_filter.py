"""Inclusion / exclusion filtering of node paths by name and revision."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

import yaml

from trunkdump.dump.models import FilterElement
from trunkdump.filters.expression import FilterSyntaxError, parse_filter_token

FilterSpec = Union[str, FilterElement]


def build_elements(specs: Optional[Iterable[FilterSpec]]) -> Optional[List[FilterElement]]:
    """Turn tokens / elements into a list. Empty or missing input yields None."""
    if specs is None:
        return None
    elements = [
        s if isinstance(s, FilterElement) else parse_filter_token(s) for s in specs
    ]
    return elements or None


def _any_covers(
    elements: Optional[Sequence[FilterElement]], path: str, revision: int
) -> bool:
    """True when some element matches *path* by name and covers *revision*."""
    if elements is None:
        return False
    return any(e.matches_name(path) and e.covers(revision) for e in elements)


class PathFilter:
    """Decide whether a relative path at a revision is retained.

    The inclusion list wins over the exclusion list. Once an inclusion list
    is configured, every path it does not cover is rejected; without one the
    default is to accept.
    """

    def __init__(
        self,
        exclude: Optional[Iterable[FilterSpec]] = None,
        include: Optional[Iterable[FilterSpec]] = None,
    ) -> None:
        self.exclude = build_elements(exclude)
        self.include = build_elements(include)

    def accepts(self, relative_path: str, revision: int) -> bool:
        if _any_covers(self.include, relative_path, revision):
            return True
        if _any_covers(self.exclude, relative_path, revision):
            return False
        return self.include is None

    @property
    def is_permissive(self) -> bool:
        """True when no list is configured and every path is accepted."""
        return self.include is None and self.exclude is None


def load_filter_file(path: Path) -> PathFilter:
    """Load a YAML file with optional ``include`` and ``exclude`` token lists."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise FilterSyntaxError(f"{path}: expected a mapping with include/exclude lists")
    include = data.get("include") or []
    exclude = data.get("exclude") or []
    for key, value in (("include", include), ("exclude", exclude)):
        if not isinstance(value, list):
            raise FilterSyntaxError(f"{path}: '{key}' must be a list of filter tokens")
    return PathFilter(
        exclude=[str(token) for token in exclude],
        include=[str(token) for token in include],
    )
