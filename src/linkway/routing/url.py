"""Incoming deeplink URLs.

A deeplink such as ``myapp://user/42?ref=abc`` is split into its scheme
(``myapp``), sanitized path (``user/42``), and query parameters. For app
schemes there is no host: everything after ``://`` is path, so the first
component takes part in matching like any other segment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import unquote

from linkway.routing.query import QueryParams
from linkway.routing.template import sanitize_path

SCHEME_SEPARATOR = "://"


@dataclass(frozen=True, slots=True)
class DeeplinkURL:
    """A sanitized incoming URL. Immutable after parsing."""

    raw: str
    scheme: str | None
    path: str
    segments: tuple[str, ...] = ()
    query: QueryParams = field(default_factory=QueryParams)

    @classmethod
    def parse(cls, raw: str) -> DeeplinkURL:
        """Parse and sanitize *raw* into a ``DeeplinkURL``.

        Examples::

            "myapp://user/42?ref=abc" -> scheme="myapp", path="user/42", query={"ref": "abc"}
            " /user//42/ "            -> scheme=None,    path="user/42"
            "MyApp://Promo#top"       -> scheme="myapp", path="Promo"

        The fragment is dropped. Path segments are percent-decoded; the
        sanitized ``path`` keeps its original encoding.
        """
        text = (raw or "").strip()
        text, _, _fragment = text.partition("#")

        # The query may itself carry URLs, so the scheme is looked up before "?"
        path_part, _, query_string = text.partition("?")
        scheme: str | None = None
        if SCHEME_SEPARATOR in path_part:
            head, _, path_part = path_part.partition(SCHEME_SEPARATOR)
            scheme = head.strip().lower() or None

        path = sanitize_path(path_part)
        segments = tuple(unquote(part) for part in path.split("/")) if path else ()
        return cls(
            raw=raw,
            scheme=scheme,
            path=path,
            segments=segments,
            query=QueryParams(query_string),
        )

    def __str__(self) -> str:
        return self.raw
