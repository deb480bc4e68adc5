"""Path templates with ``{name}`` parameter segments."""

import re
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Mapping

from ..models.errors import MissingParameterError, PathTemplateError

_PARAMETER_SEGMENT = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def _parameter_of(template: str, segment: str) -> str | None:
    match = _PARAMETER_SEGMENT.fullmatch(segment)
    if match:
        return match.group(1)
    if "{" in segment or "}" in segment:
        raise PathTemplateError(template, segment)
    return None


@dataclass(frozen=True)
class PathTemplate:
    """A URL path such as ``api/v1/things/{id}``.

    Segments are separated by ``/``; a parameter segment is exactly
    ``{identifier}``. Malformed brace segments are rejected on first use.
    """

    template: str

    @cached_property
    def segments(self) -> tuple[tuple[str, str | None], ...]:
        return tuple(
            (segment, _parameter_of(self.template, segment))
            for segment in self.template.split("/")
        )

    @cached_property
    def parameter_names(self) -> tuple[str, ...]:
        names: dict[str, None] = {}
        for _, name in self.segments:
            if name is not None:
                names.setdefault(name, None)
        return tuple(names)

    def substitute(self, values: Mapping[str, Any]) -> str:
        missing = [name for name in self.parameter_names if values.get(name) is None]
        if missing:
            raise MissingParameterError(self.template, missing)

        return "/".join(
            segment if name is None else str(values[name])
            for segment, name in self.segments
        )

    def __str__(self) -> str:
        return self.template


def parameter_names(template: str) -> tuple[str, ...]:
    return PathTemplate(template).parameter_names


def substitute(template: str, values: Mapping[str, Any]) -> str:
    return PathTemplate(template).substitute(values)


def join_url(base_url: str, path: str) -> str:
    """Join a base URL and a path with exactly one slash between them.

    Examples:
        >>> join_url("https://api.example.com/", "things/1")
        'https://api.example.com/things/1'
        >>> join_url("https://api.example.com", "/things/1")
        'https://api.example.com/things/1'
    """
    if base_url.endswith("/"):
        base_url = base_url[:-1]
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base_url}{path}"
