__version__ = "0.1"

from .encoding import DEFAULT_ENCODING, lookup_encoding
from .errors import EmptyHost, InvalidIPv6Address, InvalidPort, RelativeURLWithoutBase, UnsupportedIDNA, URLError
from .form_urlencoded import parse_form_urlencoded, serialize_form_urlencoded
from .host import IPv6, Domain, Host, parse_host, serialize_host
from .ipv6 import IPv6Address
from .parser import DEFAULT_PORTS, RELATIVE_SCHEMES, parse_url
from .percent import EncodeSet, percent_decode, percent_encode, utf8_percent_encode
from .url import URL, OtherSchemeData, RelativeSchemeData, SchemeData, SchemeRelativeURL, UserInfo
