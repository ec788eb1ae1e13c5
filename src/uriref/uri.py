"""uriref.uri
A reusable URI holder with getter-style access to the parsed components.
"""

import logging

from typing import Self

from .parse import ParsedUri, URIParseError, parse_uri_reference

logger = logging.getLogger(__name__)


class Uri:
    """Holds the result of the most recent successful parse_from_string call.

    A failed parse leaves the previous result in place. An instance must not
    be parsed into from several threads at once; use one Uri per thread.
    """

    def __init__(self: Self, uri_string: str | None = None) -> None:
        self._parsed: ParsedUri = ParsedUri()
        if uri_string is not None:
            self._parsed = parse_uri_reference(uri_string)

    def parse_from_string(self: Self, uri_string: str) -> bool:
        """Replaces every component with those parsed from uri_string.
        Returns False, and keeps the old components, if uri_string is malformed.
        """
        try:
            parsed: ParsedUri = parse_uri_reference(uri_string)
        except URIParseError as e:
            logger.debug("failed to parse %r: %s", uri_string, e)
            return False
        logger.debug("parsed %r as %r", uri_string, parsed)
        self._parsed = parsed
        return True

    @property
    def parsed(self: Self) -> ParsedUri:
        return self._parsed

    def get_scheme(self: Self) -> str:
        return self._parsed.scheme or ""

    def get_user_info(self: Self) -> str:
        return self._parsed.userinfo or ""

    def get_host(self: Self) -> str:
        return self._parsed.host

    def get_path(self: Self) -> list[str]:
        """The path as a list of segments; a leading "" marks an absolute path."""
        return list(self._parsed.path)

    def has_port(self: Self) -> bool:
        return self._parsed.has_port

    def get_port(self: Self) -> int:
        """Only meaningful when has_port() is True."""
        return self._parsed.port if self._parsed.port is not None else 0

    def get_query(self: Self) -> str:
        return self._parsed.query or ""

    def get_fragment(self: Self) -> str:
        return self._parsed.fragment or ""

    def is_relative_reference(self: Self) -> bool:
        return self._parsed.is_relative_reference

    def contains_relative_path(self: Self) -> bool:
        return self._parsed.contains_relative_path

    def __eq__(self: Self, other: object) -> bool:
        if not isinstance(other, Uri):
            return NotImplemented
        return self._parsed == other._parsed

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({self._parsed!r})"
