"""wurl.ipv6
IPv6 address parser and serializer.
Parsing follows the URL Standard's IPv6 parser; serializing follows RFC 5952 section 4.
"""

import dataclasses

from typing import Self

from .percent import from_hex


@dataclasses.dataclass(frozen=True)
class IPv6Address:
    """Eight 16-bit pieces. Use IPv6Address.parse to build one from text."""

    pieces: tuple[int, ...]

    def __post_init__(self: Self) -> None:
        if len(self.pieces) != 8 or not all(0 <= p <= 0xFFFF for p in self.pieces):
            raise ValueError("an IPv6 address is exactly 8 pieces in 0..0xFFFF")

    @classmethod
    def parse(cls: type[Self], data: str) -> Self | None:
        """Parses an address without its surrounding brackets.
        Returns None instead of raising, since malformed addresses are common and shouldn't abort a larger parse.
        """
        length: int = len(data)
        pieces: list[int] = [0] * 8
        piece_pointer: int = 0
        compress_pointer: int | None = None
        is_ipv4: bool = False
        i: int = 0

        if length == 0:
            return None
        if data[0] == ":":
            if not data.startswith("::"):
                return None
            i = 2
            piece_pointer = 1
            compress_pointer = 1

        while i < length:
            if piece_pointer == 8:
                return None
            if data[i] == ":":
                if compress_pointer is not None:
                    return None
                i += 1
                piece_pointer += 1
                compress_pointer = piece_pointer
                continue

            start: int = i
            end: int = min(length, start + 4)
            value: int = 0
            while i < end:
                digit: int | None = from_hex(ord(data[i]))
                if digit is None:
                    break
                value = value * 0x10 + digit
                i += 1

            if i < length:
                if data[i] == ".":
                    if i == start:
                        return None
                    i = start
                    is_ipv4 = True
                    break
                if data[i] != ":":
                    return None
                i += 1
                if i == length:
                    return None
            pieces[piece_pointer] = value
            piece_pointer += 1

        if is_ipv4:
            if piece_pointer > 6:
                return None
            octets: list[str] = data[i:].split(".")
            if len(octets) != 4:
                return None
            for n, octet in enumerate(octets):
                if not octet or not octet.isascii() or not octet.isdigit():
                    return None
                if int(octet) > 255:
                    return None
                pieces[piece_pointer] = pieces[piece_pointer] * 0x100 + int(octet)
                if n % 2 == 1:
                    piece_pointer += 1

        if compress_pointer is not None:
            # Swap everything after the compression point to the end. The gap only holds zeroes.
            swaps: int = piece_pointer - compress_pointer
            piece_pointer = 7
            while swaps > 0:
                j: int = compress_pointer + swaps - 1
                pieces[piece_pointer], pieces[j] = pieces[j], pieces[piece_pointer]
                swaps -= 1
                piece_pointer -= 1
        elif piece_pointer != 8:
            return None

        return cls(tuple(pieces))

    def serialize(self: Self) -> str:
        """IPv6Address.parse("2001:0db8:0:0:0:0:0:1").serialize() == "2001:db8::1" """
        compress_start, compress_end = _longest_zero_sequence(self.pieces)
        result: str = ""
        i: int = 0
        while i < 8:
            if i == compress_start:
                result += "::" if i == 0 else ":"
                if compress_end == 8:
                    break
                i = compress_end
            result += f"{self.pieces[i]:x}"
            if i < 7:
                result += ":"
            i += 1
        return result

    def __str__(self: Self) -> str:
        return self.serialize()


def _longest_zero_sequence(pieces: tuple[int, ...]) -> tuple[int, int]:
    """Returns (start, end) of the leftmost longest run of zero pieces, or (-1, -1) if there are none."""
    longest: int = -1
    longest_length: int = 0
    start: int = -1
    for i, piece in enumerate((*pieces, None)):
        if piece == 0:
            if start < 0:
                start = i
            continue
        if start >= 0 and i - start > longest_length:
            longest = start
            longest_length = i - start
        start = -1
    if longest < 0:
        return -1, -1
    return longest, longest + longest_length
