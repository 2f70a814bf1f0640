"""wurl.percent
Percent-encoding as used by the URL Standard.
Encoding works on bytes; the encode sets are nested, each one escaping
everything the previous one does plus a few more delimiters.
"""

import enum


class EncodeSet(enum.IntEnum):
    SIMPLE = 0
    DEFAULT = 1
    USERINFO = 2
    PASSWORD = 3
    USERNAME = 4


# Minimum encode set that escapes each delimiter.
# " " / DQUOTE / "#" / "<" / ">" / "?" / "`"  -> default encode set
# "@"                                         -> userinfo encode set
# "/" / "\"                                   -> password encode set
# ":"                                         -> username encode set
_DELIMITER_SETS: dict[int, EncodeSet] = {
    **{ord(c): EncodeSet.DEFAULT for c in ' "#<>?`'},
    ord("@"): EncodeSet.USERINFO,
    ord("/"): EncodeSet.PASSWORD,
    ord("\\"): EncodeSet.PASSWORD,
    ord(":"): EncodeSet.USERNAME,
}


def from_hex(byte: int) -> int | None:
    if 0x30 <= byte <= 0x39:  # 0-9
        return byte - 0x30
    if 0x41 <= byte <= 0x46:  # A-F
        return byte - 0x41 + 10
    if 0x61 <= byte <= 0x66:  # a-f
        return byte - 0x61 + 10
    return None


def to_hex_upper(value: int) -> str:
    assert 0 <= value <= 15, f"not a hex digit value: {value}"
    return "0123456789ABCDEF"[value]


def percent_encode_byte(byte: int) -> str:
    """percent_encode_byte(0x2F) == "%2F" """
    return f"%{to_hex_upper(byte >> 4)}{to_hex_upper(byte & 0x0F)}"


def should_encode(byte: int, encode_set: EncodeSet) -> bool:
    if byte < 0x20 or byte > 0x7E:
        return True
    minimum: EncodeSet | None = _DELIMITER_SETS.get(byte)
    return minimum is not None and encode_set >= minimum


def percent_encode(data: bytes, encode_set: EncodeSet, output: list[str] | None = None) -> str:
    """Escapes every byte of data that encode_set says to escape.
    If output is given, the pieces are also appended to it, and the return value is only what this call produced.
    """
    pieces: list[str] = []
    for byte in data:
        if should_encode(byte, encode_set):
            pieces.append(percent_encode_byte(byte))
        else:
            pieces.append(chr(byte))
    if output is not None:
        output.extend(pieces)
    return "".join(pieces)


def utf8_percent_encode(text: str, encode_set: EncodeSet) -> str:
    # Lone surrogates can't be UTF-8 encoded; they become "?".
    return percent_encode(text.encode("utf-8", errors="replace"), encode_set)


def percent_decode(data: bytes) -> bytes:
    """Never fails. Malformed escapes like "%zz" or a trailing "%4" are kept as-is."""
    result: bytearray = bytearray()
    i: int = 0
    while i < len(data):
        byte: int = data[i]
        if byte == 0x25 and i + 2 < len(data):
            high: int | None = from_hex(data[i + 1])
            low: int | None = from_hex(data[i + 2])
            if high is not None and low is not None:
                result.append(high * 0x10 + low)
                i += 3
                continue
        result.append(byte)
        i += 1
    return bytes(result)
