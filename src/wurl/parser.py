"""wurl.parser
Splits input into scheme, authority, path, query, and fragment, and builds a URL from them.
Hosts go through wurl.host; every component is escaped on the way in, so URL.serialize
never has to.
"""

import logging
import re

from .encoding import DEFAULT_ENCODING, encode, lookup_encoding
from .errors import InvalidPort, RelativeURLWithoutBase
from .host import Domain, Host, parse_host
from .percent import EncodeSet, percent_encode_byte, utf8_percent_encode
from .url import URL, OtherSchemeData, RelativeSchemeData, SchemeRelativeURL, UserInfo

logger = logging.getLogger(__name__)

# Schemes with an authority and a hierarchical path, and their default ports.
RELATIVE_SCHEMES: frozenset[str] = frozenset(("ftp", "file", "gopher", "http", "https", "ws", "wss"))
DEFAULT_PORTS: dict[str, str] = {
    "ftp": "21",
    "gopher": "70",
    "http": "80",
    "https": "443",
    "ws": "80",
    "wss": "443",
}

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME: str = r"(?P<scheme>[A-Za-z][A-Za-z0-9+\-.]*):"
_SCHEME_PAT: re.Pattern[str] = re.compile(_SCHEME)

# C0 control or space
_C0_CONTROL_OR_SPACE: str = "".join(map(chr, range(0x21)))

# The authority ends at the first of these.
_AUTHORITY_END_PAT: re.Pattern[str] = re.compile(r"[/\\?#]")

# Any two of "/" and "\" in a row start an authority.
_TWO_SLASHES: frozenset[str] = frozenset(("//", "\\\\", "/\\", "\\/"))

# Path segments are separated by either kind of slash.
_PATH_SEPARATOR_PAT: re.Pattern[str] = re.compile(r"[/\\]")

_SINGLE_DOT_SEGMENTS: frozenset[str] = frozenset((".", "%2e"))
_DOUBLE_DOT_SEGMENTS: frozenset[str] = frozenset(("..", ".%2e", "%2e.", "%2e%2e"))

# Bytes in 0x21-0x7E that still get escaped in queries: DQUOTE / "#" / "<" / ">" / "`"
_QUERY_ESCAPED: frozenset[int] = frozenset(b'"#<>`')


def parse_url(data: str, base: URL | None = None, encoding_override: str | None = None) -> URL:
    """Parses data, resolving it against base if it's relative.
    encoding_override is the encoding the query is written in before it's percent-encoded (UTF-8 by default).
    """
    data = data.strip(_C0_CONTROL_OR_SPACE)
    data = re.sub(r"[\t\n\r]", "", data)

    result: URL
    m: re.Match[str] | None = _SCHEME_PAT.match(data)
    if m is not None:
        scheme: str = m["scheme"].lower()
        rest: str = data[m.end() :]
        if scheme not in RELATIVE_SCHEMES:
            result = _parse_opaque(scheme, rest, encoding_override)
        elif (
            base is not None
            and base.scheme == scheme
            and base.relative is not None
            and not rest.startswith(("/", "\\"))
        ):
            # "http:foo" against an http base is relative.
            result = _parse_relative(rest, base, encoding_override)
        else:
            result = _parse_after_slashes(scheme, rest, encoding_override)
    elif base is None:
        raise RelativeURLWithoutBase()
    elif base.relative is None:
        if not data.startswith("#"):
            raise RelativeURLWithoutBase(f"Can't resolve {data!r} against {base.scheme}: URL")
        result = base.replace(fragment=_encode_fragment(data[1:]))
    else:
        result = _parse_relative(data, base, encoding_override)

    logger.debug("parsed %r as %s", data, result)
    return result


def _split_query_and_fragment(data: str) -> tuple[str, str | None, str | None]:
    """_split_query_and_fragment("/a?b#c?d") == ("/a", "b", "c?d")"""
    before_fragment, hash_sign, fragment = data.partition("#")
    before_query, question_mark, query = before_fragment.partition("?")
    return (
        before_query,
        query if len(question_mark) > 0 else None,
        fragment if len(hash_sign) > 0 else None,
    )


def _parse_opaque(scheme: str, rest: str, encoding_override: str | None) -> URL:
    scheme_data, query, fragment = _split_query_and_fragment(rest)
    return URL(
        scheme=scheme,
        scheme_data=OtherSchemeData(utf8_percent_encode(scheme_data, EncodeSet.SIMPLE)),
        query=_encode_query(query, encoding_override) if query is not None else None,
        fragment=_encode_fragment(fragment) if fragment is not None else None,
    )


def _parse_after_slashes(scheme: str, rest: str, encoding_override: str | None) -> URL:
    if scheme == "file":
        # The host may be empty: "file:///etc" has host "" and path "/etc".
        if rest[:2] in _TWO_SLASHES:
            return _parse_authority(scheme, rest[2:], encoding_override)
        return _parse_authority(scheme, "/" + rest.lstrip("/\\"), encoding_override)
    return _parse_authority(scheme, rest.lstrip("/\\"), encoding_override)


def _parse_authority(scheme: str, rest: str, encoding_override: str | None) -> URL:
    """rest is everything after "scheme://", slashes already skipped."""
    m: re.Match[str] | None = _AUTHORITY_END_PAT.search(rest)
    authority_end: int = m.start() if m is not None else len(rest)
    authority: str = rest[:authority_end]

    userinfo: UserInfo | None = None
    raw_userinfo, at_sign, host_and_port = authority.rpartition("@")
    if len(at_sign) > 0:
        username, colon, password = raw_userinfo.partition(":")
        userinfo = UserInfo(
            username=utf8_percent_encode(username, EncodeSet.USERNAME),
            password=utf8_percent_encode(password, EncodeSet.PASSWORD) if len(colon) > 0 else None,
        )

    raw_host, raw_port = _split_host_and_port(host_and_port)
    host: Host = _parse_host(scheme, raw_host)
    port: str = _normalize_port(scheme, raw_port)

    raw_path, query, fragment = _split_query_and_fragment(rest[authority_end:])
    path: tuple[str, ...] = ()
    if len(raw_path) > 0:
        path = _parse_path(raw_path[1:], ())

    return URL(
        scheme=scheme,
        scheme_data=RelativeSchemeData(SchemeRelativeURL(userinfo=userinfo, host=host, port=port, path=path)),
        query=_encode_query(query, encoding_override) if query is not None else None,
        fragment=_encode_fragment(fragment) if fragment is not None else None,
    )


def _parse_relative(data: str, base: URL, encoding_override: str | None) -> URL:
    """Resolves data, which has no scheme of its own, against base, which has relative scheme data."""
    assert base.relative is not None
    if data[:2] in _TWO_SLASHES:
        return _parse_after_slashes(base.scheme, data, encoding_override)

    raw_path, query, fragment = _split_query_and_fragment(data)
    encoded_query: str | None = _encode_query(query, encoding_override) if query is not None else None
    path: tuple[str, ...]
    if raw_path.startswith(("/", "\\")):
        path = _parse_path(raw_path[1:], ())
    elif len(raw_path) == 0:
        path = base.relative.path
        if query is None:
            encoded_query = base.query
    else:
        path = _parse_path(raw_path, base.relative.path[:-1])

    return URL(
        scheme=base.scheme,
        scheme_data=RelativeSchemeData(
            SchemeRelativeURL(
                userinfo=base.relative.userinfo,
                host=base.relative.host,
                port=base.relative.port,
                path=path,
            )
        ),
        query=encoded_query,
        fragment=_encode_fragment(fragment) if fragment is not None else None,
    )


def _split_host_and_port(data: str) -> tuple[str, str | None]:
    """The port starts at the first ":" that isn't inside brackets."""
    inside_brackets: bool = False
    for i, c in enumerate(data):
        if c == "[":
            inside_brackets = True
        elif c == "]":
            inside_brackets = False
        elif c == ":" and not inside_brackets:
            return data[:i], data[i + 1 :]
    return data, None


def _parse_host(scheme: str, data: str) -> Host:
    if scheme == "file" and len(data) == 0:
        return Domain(())
    host: Host = parse_host(data)
    if isinstance(host, Domain):
        host = Domain(tuple(label.lower() for label in host.labels))
    return host


def _normalize_port(scheme: str, port: str | None) -> str:
    if port is None or len(port) == 0:
        return ""
    if not port.isascii() or not port.isdigit():
        raise InvalidPort(f"Invalid port number: {port!r}")
    # Get rid of leading 0s.
    port = str(int(port, base=10))
    if int(port) > 0xFFFF:
        raise InvalidPort(f"Port number out of range: {port}")
    if DEFAULT_PORTS.get(scheme) == port:
        return ""
    return port


def _parse_path(data: str, base_path: tuple[str, ...]) -> tuple[str, ...]:
    """Appends the segments of data to base_path, resolving "." and ".." segments as it goes.
    A trailing dot segment leaves an empty last segment, so "/a/b/.." ends up as "/a/".
    """
    path: list[str] = list(base_path)
    segments: list[str] = _PATH_SEPARATOR_PAT.split(data)
    for i, segment in enumerate(segments):
        is_last: bool = i == len(segments) - 1
        lowered: str = segment.lower()
        if lowered in _DOUBLE_DOT_SEGMENTS:
            if len(path) > 0:
                path.pop()
            if is_last:
                path.append("")
        elif lowered in _SINGLE_DOT_SEGMENTS:
            if is_last:
                path.append("")
        else:
            path.append(utf8_percent_encode(segment, EncodeSet.DEFAULT))
    return tuple(path)


def _encode_query(query: str, encoding_override: str | None) -> str:
    encoding: str = DEFAULT_ENCODING
    if encoding_override is not None:
        encoding = lookup_encoding(encoding_override) or DEFAULT_ENCODING
    result: str = ""
    for byte in encode(query, encoding):
        if byte < 0x21 or byte > 0x7E or byte in _QUERY_ESCAPED:
            result += percent_encode_byte(byte)
        else:
            result += chr(byte)
    return result


def _encode_fragment(fragment: str) -> str:
    return utf8_percent_encode(fragment, EncodeSet.SIMPLE)
