"""Path filtering: filter token parsing and inclusion/exclusion evaluation."""

from trunkdump.filters.expression import FilterSyntaxError, parse_filter_token
from trunkdump.filters.path_filter import PathFilter, build_elements, load_filter_file

__all__ = [
    "FilterSyntaxError",
    "PathFilter",
    "build_elements",
    "load_filter_file",
    "parse_filter_token",
]
