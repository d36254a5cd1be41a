"""
Projection of decoded bencode values onto plain, JSON-serialisable Python values.

Only used for human/debug display. Byte strings are shown as UTF-8 text, so
binary payloads (piece hashes, compact peers) cannot be displayed this way.
"""
from .decoder import BencodeDecodeError
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString


class InvalidText(BencodeDecodeError):
    """A byte string selected for display is not valid UTF-8."""
    def __init__(self, raw: bytes):
        super().__init__(f"Byte string is not valid UTF-8 text: {raw[:32]!r}")
        self.raw = raw


def _text(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidText(raw) from exc


def project(value):
    """
    Maps a BencodeType onto int / str / list / dict.

    Raises InvalidText when a byte string (or dictionary key) is not UTF-8.
    """
    if isinstance(value, BencodeInt):
        return value.value

    if isinstance(value, BencodeString):
        return _text(value.value)

    if isinstance(value, BencodeList):
        return [project(item) for item in value.value]

    if isinstance(value, BencodeDict):
        return {_text(k): project(v) for k, v in value.value.items()}

    raise TypeError(f"Cannot project object of type {type(value)}")
