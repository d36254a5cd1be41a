import hashlib
import logging
import math
import urllib.parse
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Dict, List, Tuple

from bencode import BencodeDict, BencodeInt, BencodeString, BencodeType, MalformedEncoding, decode, encode
from .fields import join_piece_hashes, split_piece_hashes

logger = logging.getLogger(__name__)

# Keys of the info dictionary that map onto named Info fields
INFO_KEYS = (b"length", b"name", b"piece length", b"pieces")


class MissingField(MalformedEncoding):
    """A required dictionary key is absent."""
    def __init__(self, key: bytes):
        super().__init__(f"Missing required field {key.decode(errors='replace')!r}")
        self.key = key


class InvalidField(MalformedEncoding):
    """A dictionary key is present but holds the wrong kind of value."""
    def __init__(self, key: bytes, reason: str):
        super().__init__(f"Invalid field {key.decode(errors='replace')!r}: {reason}")
        self.key = key


def _require(d: BencodeDict, key: bytes, kind):
    value = d.get(key)
    if value is None:
        raise MissingField(key)
    if not isinstance(value, kind):
        raise InvalidField(key, f"expected {kind.__name__}, got {type(value).__name__}")
    return value


def _require_text(d: BencodeDict, key: bytes) -> str:
    raw = _require(d, key, BencodeString).value
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidField(key, "not valid UTF-8") from exc


@dataclass(frozen=True)
class Info:
    """
    The ``info`` dictionary of a single-file torrent.

    ``extra`` holds any further keys (``private``, ``source``, ...) as
    generic values. They take part in the canonical encoding, so the info
    hash matches what every other client computes for the same torrent.
    """
    length: int
    name: str
    piece_length: int
    pieces: Tuple[bytes, ...]
    extra: Dict[bytes, BencodeType] = field(default_factory=dict)

    @classmethod
    def from_bencode(cls, value: BencodeType) -> "Info":
        if not isinstance(value, BencodeDict):
            raise InvalidField(b"info", "expected a dictionary")

        if b"files" in value:
            raise InvalidField(b"files", "multi-file torrents are not supported")

        length = _require(value, b"length", BencodeInt).value
        name = _require_text(value, b"name")
        piece_length = _require(value, b"piece length", BencodeInt).value
        blob = _require(value, b"pieces", BencodeString).value

        if length < 0:
            raise InvalidField(b"length", "must not be negative")
        if piece_length <= 0:
            raise InvalidField(b"piece length", "must be positive")

        pieces = tuple(split_piece_hashes(blob))
        expected = math.ceil(length / piece_length)
        if len(pieces) != expected:
            raise InvalidField(
                b"pieces", f"{len(pieces)} hashes for {expected} pieces"
            )

        extra = {k: v for k, v in value.value.items() if k not in INFO_KEYS}
        return cls(length, name, piece_length, pieces, extra)

    def to_bencode(self) -> BencodeDict:
        d = dict(self.extra)
        d[b"length"] = BencodeInt(self.length)
        d[b"name"] = BencodeString(self.name.encode("utf-8"))
        d[b"piece length"] = BencodeInt(self.piece_length)
        d[b"pieces"] = BencodeString(join_piece_hashes(self.pieces))
        return BencodeDict(d)

    def encode(self) -> bytes:
        """Canonical bencode encoding of this dictionary."""
        return encode(self.to_bencode())

    def info_hash(self) -> bytes:
        """SHA-1 of the canonical encoding, as raw bytes."""
        return hashlib.sha1(self.encode()).digest()


@dataclass(frozen=True)
class Torrent:
    announce: str
    info: Info

    @classmethod
    def from_bencode(cls, value: BencodeType) -> "Torrent":
        if not isinstance(value, BencodeDict):
            raise MalformedEncoding("Invalid torrent: root must be a dictionary")

        announce = _require_text(value, b"announce")
        parsed = urllib.parse.urlsplit(announce)
        if not parsed.scheme or not parsed.netloc:
            raise InvalidField(b"announce", f"not an absolute URL: {announce!r}")

        info = Info.from_bencode(_require(value, b"info", BencodeDict))
        return cls(announce, info)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Torrent":
        return cls.from_bencode(decode(data))

    @classmethod
    def load(cls, path) -> "Torrent":
        path = Path(path)
        raw = path.read_bytes()
        torrent = cls.from_bytes(raw)
        logger.debug("[Torrent] Loaded %s: %r", path, torrent)
        return torrent

    def to_bencode(self) -> BencodeDict:
        return BencodeDict({
            b"announce": BencodeString(self.announce.encode("utf-8")),
            b"info": self.info.to_bencode(),
        })

    @cached_property
    def info_hash(self) -> bytes:
        return self.info.info_hash()

    @property
    def total_length(self) -> int:
        return self.info.length

    def summary(self) -> List[str]:
        """Human-readable description, one line per entry."""
        lines = [
            f"Tracker URL: {self.announce}",
            f"Length: {self.info.length}",
            f"Info Hash: {self.info_hash.hex()}",
            f"Piece Length: {self.info.piece_length}",
            "Piece Hashes:",
        ]
        lines.extend(piece.hex() for piece in self.info.pieces)
        return lines

    def __repr__(self):
        return (
            f"Torrent(name={self.info.name!r}, length={self.info.length}, "
            f"pieces={len(self.info.pieces)}, announce={self.announce!r})"
        )
