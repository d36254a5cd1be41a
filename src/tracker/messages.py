"""
Announce request state and decoded tracker responses.
"""
import logging
import random
import string
from dataclasses import dataclass, field
from typing import List, Optional

from bencode import BencodeDecodeError, BencodeDict, BencodeInt, BencodeList, BencodeString, decode
from torrent.fields import InvalidLength
from .errors import TrackerFailure, TrackerProtocolError, UnsupportedPeerFormat
from .utils import PeerAddress, compact_to_peers

logger = logging.getLogger(__name__)

DEFAULT_PORT = 6881
PEER_ID_PREFIX = b"-PC0001-"


def generate_peer_id(prefix: bytes = PEER_ID_PREFIX) -> bytes:
    """Client prefix followed by random alphanumerics, 20 bytes in total."""
    suffix = ''.join(random.choices(string.ascii_letters + string.digits, k=20 - len(prefix)))
    return prefix + suffix.encode("ascii")


@dataclass
class AnnounceState:
    """
    Per-announce counters sent to the tracker.

    Built fresh for every call from the caller's session; nothing here is
    shared between torrents.
    """
    peer_id: bytes
    port: int = DEFAULT_PORT
    uploaded: int = 0
    downloaded: int = 0
    left: int = 0
    compact: int = 1

    def __post_init__(self):
        if isinstance(self.peer_id, str):
            self.peer_id = self.peer_id.encode("ascii")
        if len(self.peer_id) != 20:
            raise ValueError("peer_id MUST be 20 bytes")
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"port out of range: {self.port}")

    @classmethod
    def for_torrent(cls, torrent, peer_id: bytes = None, port: int = DEFAULT_PORT) -> "AnnounceState":
        """Initial state for a fresh download of ``torrent``."""
        return cls(
            peer_id=peer_id if peer_id is not None else generate_peer_id(),
            port=port,
            left=torrent.info.length,
        )

    def params(self) -> dict:
        """Query parameters other than info_hash, in announce order."""
        return {
            "peer_id": self.peer_id,
            "port": self.port,
            "uploaded": self.uploaded,
            "downloaded": self.downloaded,
            "left": self.left,
            "compact": self.compact,
        }


def _optional_int(root: BencodeDict, key: bytes) -> Optional[int]:
    value = root.get(key)
    return value.value if isinstance(value, BencodeInt) else None


@dataclass
class TrackerResponse:
    interval: int
    peers: List[PeerAddress] = field(default_factory=list)
    complete: Optional[int] = None
    incomplete: Optional[int] = None
    warning_message: Optional[str] = None

    @classmethod
    def from_bencode(cls, root) -> "TrackerResponse":
        if not isinstance(root, BencodeDict):
            raise TrackerProtocolError("Tracker response is not a dictionary")

        failure = root.get(b"failure reason")
        if isinstance(failure, BencodeString):
            raise TrackerFailure(failure.value.decode(errors="replace"))

        interval = root.get(b"interval")
        if not isinstance(interval, BencodeInt):
            raise TrackerProtocolError("Tracker response has no integer 'interval'")

        peers_field = root.get(b"peers")
        if isinstance(peers_field, BencodeList):
            raise UnsupportedPeerFormat(
                "Tracker returned a non-compact (dictionary) peer list; only compact=1 is supported"
            )
        if not isinstance(peers_field, BencodeString):
            raise TrackerProtocolError("Tracker response has no byte-string 'peers'")

        try:
            peers = compact_to_peers(peers_field.value)
        except InvalidLength as exc:
            raise TrackerProtocolError(f"Invalid compact peer list: {exc}") from exc

        warning = root.get(b"warning message")
        warning_message = None
        if isinstance(warning, BencodeString):
            warning_message = warning.value.decode(errors="replace")
            logger.warning("[Tracker] Warning from tracker: %s", warning_message)

        return cls(
            interval=interval.value,
            peers=peers,
            complete=_optional_int(root, b"complete"),
            incomplete=_optional_int(root, b"incomplete"),
            warning_message=warning_message,
        )

    @classmethod
    def from_bytes(cls, body: bytes) -> "TrackerResponse":
        try:
            root = decode(body)
        except BencodeDecodeError as exc:
            raise TrackerProtocolError(f"Tracker response is not valid bencode: {exc}") from exc
        return cls.from_bencode(root)
