"""wurl.form_urlencoded
The application/x-www-form-urlencoded format, as used in query strings and HTML form submissions.
"""

import logging

from typing import Iterable

from .encoding import DEFAULT_ENCODING, decode, encode, lookup_encoding
from .percent import percent_decode, percent_encode_byte

logger = logging.getLogger(__name__)

# ALPHA / DIGIT / "*" / "-" / "." / "_"
_SAFE_BYTES: frozenset[int] = frozenset(b"*-._0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")


def parse_form_urlencoded(
    data: str, encoding_override: str | None = None, use_charset: bool = False, isindex: bool = False
) -> list[tuple[str, str]]:
    """Parses data into (name, value) pairs, in order.
    Never fails: bad escapes are kept literally and bad byte sequences become U+FFFD.

    With use_charset, a "_charset_" field names the encoding used to decode every field,
    including the ones that come before it.
    With isindex, a lone field without "=" is a value with an empty name.
    """
    encoding: str = DEFAULT_ENCODING
    if encoding_override is not None:
        encoding = lookup_encoding(encoding_override) or DEFAULT_ENCODING

    segments: list[str] = data.split("&")
    # An isindex submission is a single bare value; "a&value" is two ordinary fields, "value&" is still one.
    isindex = isindex and sum(1 for segment in segments if len(segment) > 0) == 1

    raw_pairs: list[tuple[str, str]] = []
    for segment in segments:
        if len(segment) > 0:
            name, equals, value = segment.partition("=")
            if len(equals) == 0 and isindex:
                name, value = "", segment
            name = name.replace("+", " ")
            value = value.replace("+", " ")
            if use_charset and name == "_charset_":
                charset: str | None = lookup_encoding(value)
                if charset is not None:
                    logger.debug("_charset_ field switches form decoding to %s", charset)
                    encoding = charset
            raw_pairs.append((name, value))
        isindex = False

    return [(_decode(name, encoding), _decode(value, encoding)) for name, value in raw_pairs]


def _decode(data: str, encoding: str) -> str:
    return decode(percent_decode(data.encode("utf-8", errors="replace")), encoding)


def serialize_form_urlencoded(pairs: Iterable[tuple[str, str]], encoding_override: str | None = None) -> str:
    """serialize_form_urlencoded([("a", "1"), ("b", "2 c")]) == "a=1&b=2+c" """
    encoding: str = DEFAULT_ENCODING
    if encoding_override is not None:
        encoding = lookup_encoding(encoding_override) or DEFAULT_ENCODING

    output: list[str] = []
    for name, value in pairs:
        if len(output) > 0:
            output.append("&")
        _byte_serialize(name, encoding, output)
        output.append("=")
        _byte_serialize(value, encoding, output)
    return "".join(output)


def _byte_serialize(data: str, encoding: str, output: list[str]) -> None:
    for byte in encode(data, encoding):
        if byte == 0x20:
            output.append("+")
        elif byte in _SAFE_BYTES:
            output.append(chr(byte))
        else:
            output.append(percent_encode_byte(byte))
