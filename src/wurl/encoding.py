"""wurl.encoding
Character encodings, looked up by the labels web content uses (e.g. "utf-8", "shift_jis").
Only the labels of the Encoding Standard are recognized; each one maps to a Python codec.
Decoding replaces invalid input, encoding writes unrepresentable characters as numeric
character references (e.g. "&#8364;").
"""

import codecs

DEFAULT_ENCODING: str = "utf-8"

# Encoding Standard encodings (in the comments) and their labels, keyed by the Python codec that implements them.
# The "replacement" encoding has no Python counterpart, so its labels are unknown here.
_LABELS_BY_CODEC: dict[str, tuple[str, ...]] = {
    # UTF-8
    "utf-8": ("unicode-1-1-utf-8", "unicode11utf8", "unicode20utf8", "utf-8", "utf8", "x-unicode20utf8"),
    # IBM866
    "cp866": ("866", "cp866", "csibm866", "ibm866"),
    # ISO-8859-2 .. ISO-8859-16
    "iso8859-2": (
        "csisolatin2", "iso-8859-2", "iso-ir-101", "iso8859-2", "iso88592", "iso_8859-2", "iso_8859-2:1987", "l2",
        "latin2",
    ),
    "iso8859-3": (
        "csisolatin3", "iso-8859-3", "iso-ir-109", "iso8859-3", "iso88593", "iso_8859-3", "iso_8859-3:1988", "l3",
        "latin3",
    ),
    "iso8859-4": (
        "csisolatin4", "iso-8859-4", "iso-ir-110", "iso8859-4", "iso88594", "iso_8859-4", "iso_8859-4:1988", "l4",
        "latin4",
    ),
    "iso8859-5": (
        "csisolatincyrillic", "cyrillic", "iso-8859-5", "iso-ir-144", "iso8859-5", "iso88595", "iso_8859-5",
        "iso_8859-5:1988",
    ),
    "iso8859-6": (
        "arabic", "asmo-708", "csiso88596e", "csiso88596i", "csisolatinarabic", "ecma-114", "iso-8859-6",
        "iso-8859-6-e", "iso-8859-6-i", "iso-ir-127", "iso8859-6", "iso88596", "iso_8859-6", "iso_8859-6:1987",
    ),
    "iso8859-7": (
        "csisolatingreek", "ecma-118", "elot_928", "greek", "greek8", "iso-8859-7", "iso-ir-126", "iso8859-7",
        "iso88597", "iso_8859-7", "iso_8859-7:1987", "sun_eu_greek",
    ),
    # ISO-8859-8 and ISO-8859-8-I decode identically.
    "iso8859-8": (
        "csiso88598e", "csisolatinhebrew", "hebrew", "iso-8859-8", "iso-8859-8-e", "iso-ir-138", "iso8859-8",
        "iso88598", "iso_8859-8", "iso_8859-8:1988", "visual", "csiso88598i", "iso-8859-8-i", "logical",
    ),
    "iso8859-10": ("csisolatin6", "iso-8859-10", "iso-ir-157", "iso8859-10", "iso885910", "l6", "latin6"),
    "iso8859-13": ("iso-8859-13", "iso8859-13", "iso885913"),
    "iso8859-14": ("iso-8859-14", "iso8859-14", "iso885914"),
    "iso8859-15": ("csisolatin9", "iso-8859-15", "iso8859-15", "iso885915", "iso_8859-15", "l9"),
    "iso8859-16": ("iso-8859-16",),
    # KOI8-R, KOI8-U
    "koi8-r": ("cskoi8r", "koi", "koi8", "koi8-r", "koi8_r"),
    "koi8-u": ("koi8-ru", "koi8-u"),
    # macintosh, x-mac-cyrillic
    "mac-roman": ("csmacintosh", "mac", "macintosh", "x-mac-roman"),
    "mac-cyrillic": ("x-mac-cyrillic", "x-mac-ukrainian"),
    # windows-874 .. windows-1258
    "cp874": ("dos-874", "iso-8859-11", "iso8859-11", "iso885911", "tis-620", "windows-874"),
    "cp1250": ("cp1250", "windows-1250", "x-cp1250"),
    "cp1251": ("cp1251", "windows-1251", "x-cp1251"),
    # The Latin-1 and ASCII labels mean windows-1252 on the web.
    "cp1252": (
        "ansi_x3.4-1968", "ascii", "cp1252", "cp819", "csisolatin1", "ibm819", "iso-8859-1", "iso-ir-100",
        "iso8859-1", "iso88591", "iso_8859-1", "iso_8859-1:1987", "l1", "latin1", "us-ascii", "windows-1252",
        "x-cp1252",
    ),
    "cp1253": ("cp1253", "windows-1253", "x-cp1253"),
    "cp1254": (
        "cp1254", "csisolatin5", "iso-8859-9", "iso-ir-148", "iso8859-9", "iso88599", "iso_8859-9",
        "iso_8859-9:1989", "l5", "latin5", "windows-1254", "x-cp1254",
    ),
    "cp1255": ("cp1255", "windows-1255", "x-cp1255"),
    "cp1256": ("cp1256", "windows-1256", "x-cp1256"),
    "cp1257": ("cp1257", "windows-1257", "x-cp1257"),
    "cp1258": ("cp1258", "windows-1258", "x-cp1258"),
    # GBK, gb18030, Big5
    "gbk": (
        "chinese", "csgb2312", "csiso58gb231280", "gb2312", "gb_2312", "gb_2312-80", "gbk", "iso-ir-58", "x-gbk",
    ),
    "gb18030": ("gb18030",),
    "big5hkscs": ("big5", "big5-hkscs", "cn-big5", "csbig5", "x-x-big5"),
    # EUC-JP, ISO-2022-JP, Shift_JIS
    "euc_jp": ("cseucpkdfmtjapanese", "euc-jp", "x-euc-jp"),
    "iso2022_jp": ("csiso2022jp", "iso-2022-jp"),
    "cp932": ("csshiftjis", "ms932", "ms_kanji", "shift-jis", "shift_jis", "sjis", "windows-31j", "x-sjis"),
    # EUC-KR
    "cp949": (
        "cseuckr", "csksc56011987", "euc-kr", "iso-ir-149", "korean", "ks_c_5601-1987", "ks_c_5601-1989",
        "ksc5601", "ksc_5601", "windows-949",
    ),
    # UTF-16BE, UTF-16LE
    "utf-16-be": ("unicodefffe", "utf-16be"),
    "utf-16-le": ("csunicode", "iso-10646-ucs-2", "ucs-2", "unicode", "unicodefeff", "utf-16", "utf-16le"),
    # x-user-defined
    "x-user-defined": ("x-user-defined",),
}

_CODECS_BY_LABEL: dict[str, str] = {label: codec for codec, labels in _LABELS_BY_CODEC.items() for label in labels}

# Forms and URLs are never written in UTF-16; the Encoding Standard's "output encoding" for it is UTF-8.
_UTF8_OUTPUT_CODECS: frozenset[str] = frozenset(("utf-8", "utf-16-be", "utf-16-le"))

# Leading and trailing ASCII whitespace is ignored in labels.
_ASCII_WHITESPACE: str = "\t\n\f\r "

# x-user-defined: ASCII bytes as-is, 0x80-0xFF to U+F780-U+F7FF.
_X_USER_DEFINED_DECODING_TABLE: str = "".join(chr(b) if b < 0x80 else chr(0xF780 + b - 0x80) for b in range(256))
_X_USER_DEFINED_ENCODING_TABLE = codecs.charmap_build(_X_USER_DEFINED_DECODING_TABLE)


def _x_user_defined_encode(text: str, errors: str = "strict") -> tuple[bytes, int]:
    return codecs.charmap_encode(text, errors, _X_USER_DEFINED_ENCODING_TABLE)


def _x_user_defined_decode(data: bytes, errors: str = "strict") -> tuple[str, int]:
    return codecs.charmap_decode(data, errors, _X_USER_DEFINED_DECODING_TABLE)


def _search_codec(name: str) -> codecs.CodecInfo | None:
    if name not in ("x-user-defined", "x_user_defined"):
        return None
    return codecs.CodecInfo(name="x-user-defined", encode=_x_user_defined_encode, decode=_x_user_defined_decode)


codecs.register(_search_codec)


def lookup_encoding(label: str) -> str | None:
    """Returns the Python codec for an Encoding Standard label, or None if label is unknown.
    lookup_encoding(" UTF8 ") == "utf-8"
    lookup_encoding("rot13") is None
    """
    # Labels are matched ASCII case-insensitively; str.lower would also map e.g. KELVIN SIGN to "k".
    if not label.isascii():
        return None
    return _CODECS_BY_LABEL.get(label.strip(_ASCII_WHITESPACE).lower())


def decode(data: bytes, encoding: str = DEFAULT_ENCODING) -> str:
    return data.decode(encoding, errors="replace")


def encode(text: str, encoding: str = DEFAULT_ENCODING) -> bytes:
    if encoding in _UTF8_OUTPUT_CODECS:
        # Every code point is representable except lone surrogates.
        return text.encode(DEFAULT_ENCODING, errors="replace")
    return text.encode(encoding, errors="xmlcharrefreplace")
