"""wurl.url
The parsed form of a URL, and its serialization.
"""

import dataclasses

from typing import Any, Self

from .form_urlencoded import parse_form_urlencoded
from .host import Host


@dataclasses.dataclass(frozen=True)
class UserInfo:
    username: str
    password: str | None = None


@dataclasses.dataclass(frozen=True)
class SchemeRelativeURL:
    """The hierarchical part of URLs with relative schemes (http, file, ...).
    port is a string of ASCII digits, or "" when the scheme's default port applies.
    """

    userinfo: UserInfo | None
    host: Host
    port: str
    path: tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class RelativeSchemeData:
    relative: SchemeRelativeURL


@dataclasses.dataclass(frozen=True)
class OtherSchemeData:
    data: str


SchemeData = RelativeSchemeData | OtherSchemeData


@dataclasses.dataclass(frozen=True)
class URL:
    """A parsed URL. Build these with URL.parse; every component is stored escaped."""

    scheme: str
    scheme_data: SchemeData
    query: str | None = None
    fragment: str | None = None

    @classmethod
    def parse(cls: type[Self], data: str, base: Self | None = None, encoding_override: str | None = None) -> Self:
        from .parser import parse_url

        return parse_url(data, base=base, encoding_override=encoding_override)

    def join(self: Self, data: str) -> Self:
        """Resolves data against this URL, like urllib.parse.urljoin."""
        return self.parse(data, base=self)

    def replace(self: Self, **changes: Any) -> Self:
        return dataclasses.replace(self, **changes)

    @property
    def relative(self: Self) -> SchemeRelativeURL | None:
        if isinstance(self.scheme_data, RelativeSchemeData):
            return self.scheme_data.relative
        return None

    @property
    def username(self: Self) -> str | None:
        if self.relative is None or self.relative.userinfo is None:
            return None
        return self.relative.userinfo.username

    @property
    def password(self: Self) -> str | None:
        if self.relative is None or self.relative.userinfo is None:
            return None
        return self.relative.userinfo.password

    @property
    def host(self: Self) -> Host | None:
        if self.relative is None:
            return None
        return self.relative.host

    @property
    def hostname(self: Self) -> str | None:
        if self.relative is None:
            return None
        return self.relative.host.serialize()

    @property
    def port(self: Self) -> int | None:
        if self.relative is not None and len(self.relative.port) > 0:
            return int(self.relative.port, base=10)
        return None

    @property
    def path(self: Self) -> str:
        """The serialized path, or the scheme data itself for URLs like "mailto:..." """
        if self.relative is None:
            return self.scheme_data.data
        return _serialize_path(self.relative.path)

    def query_pairs(self: Self, encoding_override: str | None = None) -> list[tuple[str, str]]:
        if self.query is None:
            return []
        return parse_form_urlencoded(self.query, encoding_override=encoding_override)

    def serialize_no_fragment(self: Self) -> str:
        result: str = f"{self.scheme}:"
        match self.scheme_data:
            case RelativeSchemeData(SchemeRelativeURL(userinfo, host, port, path)):
                result += "//"
                if userinfo is not None and (len(userinfo.username) > 0 or userinfo.password is not None):
                    result += userinfo.username
                    if userinfo.password is not None:
                        result += f":{userinfo.password}"
                    result += "@"
                result += host.serialize()
                if len(port) > 0:
                    result += f":{port}"
                result += _serialize_path(path)
            case OtherSchemeData(data):
                result += data
        if self.query is not None:
            result += f"?{self.query}"
        return result

    def serialize(self: Self) -> str:
        result: str = self.serialize_no_fragment()
        if self.fragment is not None:
            result += f"#{self.fragment}"
        return result

    def __str__(self: Self) -> str:
        return self.serialize()


def _serialize_path(path: tuple[str, ...]) -> str:
    if len(path) == 0:
        return "/"
    return "".join(f"/{segment}" for segment in path)
