"""uriref.parse
Stage-by-stage parsing of RFC 3986 URI-references into their components.

Each stage is a pure function over the input string and an offset into it,
so that every stage can be exercised on its own. parse_uri_reference runs
them in order and assembles a ParsedUri.
"""

import dataclasses
import logging
import re

from typing import Self
from urllib.parse import unquote

logger = logging.getLogger(__name__)

# Largest value accepted in the port subcomponent.
MAX_PORT: int = 65535

# Percent-decoded userinfo octets are turned back into text with this codec.
USERINFO_ENCODING: str = "utf-8"

# Each of these ABNF rules is from RFC 3986 or 5234.

# ALPHA = %x41-5A / %x61-7A
_ALPHA: str = r"[A-Za-z]"

# DIGIT = %x30-39
_DIGIT: str = r"[0-9]"

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
_HEXDIG: str = rf"(?:{_DIGIT}|[A-Fa-f])"

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
_UNRESERVED: str = rf"(?:{_ALPHA}|{_DIGIT}|[-._~])"

# pct-encoded = "%" HEXDIG HEXDIG
_PCT_ENCODED: str = rf"%{_HEXDIG}{_HEXDIG}"

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
_SUB_DELIMS: str = r"[!$&'()*+,;=]"

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME: str = rf"{_ALPHA}(?:{_ALPHA}|{_DIGIT}|[+\-.])*"
_SCHEME_PAT: re.Pattern[str] = re.compile(_SCHEME)

# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
_USERINFO: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|:)*"
_USERINFO_PAT: re.Pattern[str] = re.compile(_USERINFO)

# An authority ends at the first "/", "?" or "#", or at the end of the string.
_AUTHORITY_END_PAT: re.Pattern[str] = re.compile(r"[/?#]")


class URIParseError(ValueError):
    """Raised when a string is not a well-formed URI-reference."""

    def __init__(self: Self, message: str, text: str) -> None:
        super().__init__(message)
        self.text: str = text


class InvalidSchemeError(URIParseError):
    """The text before the scheme delimiter is not a valid scheme."""


class InvalidUserInfoError(URIParseError):
    """The text before "@" in the authority is not a valid userinfo."""


class InvalidPortError(URIParseError):
    """The text after ":" in the authority is not a port number in range."""


@dataclasses.dataclass(frozen=True)
class ParsedUri:
    """The components of a parsed URI-reference.

    A path of () means no path was present at all, while a first segment of
    "" marks an absolute path. userinfo is percent-decoded; query and
    fragment are kept exactly as they appeared.
    """

    scheme: str | None = None
    userinfo: str | None = None
    host: str = ""
    port: int | None = None
    path: tuple[str, ...] = ()
    query: str | None = None
    fragment: str | None = None

    @property
    def has_port(self: Self) -> bool:
        return self.port is not None

    @property
    def is_relative_reference(self: Self) -> bool:
        return not self.scheme

    @property
    def contains_relative_path(self: Self) -> bool:
        """True unless the path is absolute, i.e. starts with an empty segment."""
        if len(self.path) == 0:
            return True
        return len(self.path[0]) > 0


def parse_scheme(uri: str) -> tuple[str | None, int]:
    """Returns the scheme of uri (or None) and the index just past its ":".

    A ":" only delimits a scheme when no "/" comes before it; otherwise it
    belongs to a path segment, as in "foo/bar:baz".
    """
    colon: int = uri.find(":")
    if colon == -1:
        return None, 0

    slash: int = uri.find("/")
    if slash != -1 and slash < colon:
        return None, 0

    scheme: str = uri[:colon]
    if _SCHEME_PAT.fullmatch(scheme) is None:
        raise InvalidSchemeError(f"invalid scheme {scheme!r}", scheme)
    return scheme, colon + 1


def parse_authority(uri: str, start: int = 0) -> tuple[str | None, int]:
    """Returns the authority beginning at uri[start] (or None) and the index where it ends.

    The authority has to be introduced by "//" right at start. The index
    returned points at the delimiter that ended it, if any.
    """
    if not uri.startswith("//", start):
        return None, start

    m: re.Match[str] | None = _AUTHORITY_END_PAT.search(uri, start + 2)
    end: int = m.start() if m is not None else len(uri)
    return uri[start + 2 : end], end


def _parse_port(port: str) -> int:
    # port = *DIGIT, bounded by MAX_PORT. Empty means port 0.
    value: int = 0
    for c in port:
        if not "0" <= c <= "9":
            raise InvalidPortError(f"invalid character {c!r} in port {port!r}", port)
        value = value * 10 + (ord(c) - ord("0"))
        if value > MAX_PORT:
            raise InvalidPortError(f"port {port!r} is larger than {MAX_PORT}", port)
    return value


def parse_authority_components(authority: str) -> tuple[str | None, str, int | None]:
    """Splits authority into (userinfo, host, port).

    authority = [ userinfo "@" ] host [ ":" port ]
    """
    userinfo: str | None = None
    host_port: str = authority

    userinfo_raw, at, rest = authority.partition("@")
    if len(at) > 0:
        if _USERINFO_PAT.fullmatch(userinfo_raw) is None:
            raise InvalidUserInfoError(f"invalid userinfo {userinfo_raw!r}", userinfo_raw)
        userinfo = unquote(userinfo_raw, encoding=USERINFO_ENCODING)
        host_port = rest

    host, colon, port = host_port.partition(":")
    if len(colon) == 0:
        return userinfo, host, None
    return userinfo, host, _parse_port(port)


def parse_fragment_and_query(uri: str, start: int = 0) -> tuple[str | None, str | None, int]:
    """Returns (query, fragment, end) for the tail uri[start:].

    The fragment is split off first, so a "?" after "#" stays in the
    fragment. uri[start:end] is what remains for the path.
    """
    end: int = len(uri)

    fragment: str | None = None
    hash_mark: int = uri.find("#", start)
    if hash_mark != -1:
        fragment = uri[hash_mark + 1 :]
        end = hash_mark

    query: str | None = None
    question_mark: int = uri.find("?", start, end)
    if question_mark != -1:
        query = uri[question_mark + 1 : end]
        end = question_mark

    return query, fragment, end


def parse_path(path: str) -> list[str]:
    """Splits path into its segments.

    "" has no segments and "/" is the single empty segment of a bare
    absolute path. Otherwise every piece between slashes is kept, so
    leading and trailing slashes show up as empty segments.
    """
    if path == "/":
        return [""]
    if len(path) == 0:
        return []
    return path.split("/")


def parse_uri_reference(uri: str) -> ParsedUri:
    """RFC 3986 URI-reference parser.
    Raises a URIParseError subclass if uri is malformed.
    """
    scheme: str | None
    scheme, pos = parse_scheme(uri)

    authority: str | None
    authority, pos = parse_authority(uri, pos)

    userinfo: str | None = None
    host: str = ""
    port: int | None = None
    if authority is not None:
        userinfo, host, port = parse_authority_components(authority)

    query: str | None
    fragment: str | None
    query, fragment, end = parse_fragment_and_query(uri, pos)

    return ParsedUri(
        scheme=scheme,
        userinfo=userinfo,
        host=host,
        port=port,
        path=tuple(parse_path(uri[pos:end])),
        query=query,
        fragment=fragment,
    )
