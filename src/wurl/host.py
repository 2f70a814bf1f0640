"""wurl.host
Hosts are either a domain (a sequence of labels) or a bracketed IPv6 address.
"""

import dataclasses
import logging
import re

from typing import Self

from .encoding import decode
from .errors import EmptyHost, InvalidIPv6Address, UnsupportedIDNA
from .ipv6 import IPv6Address
from .percent import EncodeSet, percent_decode, utf8_percent_encode

logger = logging.getLogger(__name__)

# "." / U+3002 IDEOGRAPHIC FULL STOP / U+FF0E FULLWIDTH FULL STOP / U+FF61 HALFWIDTH IDEOGRAPHIC FULL STOP
_LABEL_SEPARATORS: re.Pattern[str] = re.compile("[.\u3002\uff0e\uff61]")


@dataclasses.dataclass(frozen=True)
class Domain:
    labels: tuple[str, ...]

    def serialize(self: Self) -> str:
        return ".".join(self.labels)


@dataclasses.dataclass(frozen=True)
class IPv6:
    address: IPv6Address

    def serialize(self: Self) -> str:
        return f"[{self.address.serialize()}]"


Host = Domain | IPv6


def parse_host(data: str) -> Host:
    """Parses a host as found between the userinfo and the port of an authority.
    Domains are not case-folded here.
    """
    if len(data) == 0:
        raise EmptyHost()

    if data.startswith("["):
        if not data.endswith("]"):
            raise InvalidIPv6Address()
        address: IPv6Address | None = IPv6Address.parse(data[1:-1])
        if address is None:
            raise InvalidIPv6Address()
        return IPv6(address)

    decoded: str = decode(percent_decode(utf8_percent_encode(data, EncodeSet.SIMPLE).encode("ascii")))
    labels: list[str] = _LABEL_SEPARATORS.split(decoded)
    for label in labels:
        # TODO: run labels through IDNA "domain to ASCII" once it's implemented.
        if not label.isascii():
            logger.debug("rejecting non-ASCII domain label %r", label)
            raise UnsupportedIDNA()
    return Domain(tuple(labels))


def serialize_host(host: Host) -> str:
    return host.serialize()
