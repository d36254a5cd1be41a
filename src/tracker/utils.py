"""
Utility functions for tracker communication.
"""
from typing import Iterable, List, NamedTuple

from torrent.fields import decode_chunks, encode_chunks

COMPACT_PEER_LEN = 6


class PeerAddress(NamedTuple):
    ip: str
    port: int

    def __str__(self):
        return f"{self.ip}:{self.port}"


def compact_to_peers(blob: bytes) -> List[PeerAddress]:
    """
    Decodes a compact peer list (6 bytes per peer: 4 for IP, 2 for port)
    into a list of PeerAddress tuples.

    Raises InvalidLength when the blob is not a whole number of records.
    """
    peers = []
    for chunk in decode_chunks(blob, COMPACT_PEER_LEN):
        ip = ".".join(str(b) for b in chunk[:4])
        port = int.from_bytes(chunk[4:6], "big")
        peers.append(PeerAddress(ip, port))
    return peers


def peers_to_compact(peers: Iterable[PeerAddress]) -> bytes:
    records = []
    for ip, port in peers:
        octets = bytes(int(part) for part in ip.split("."))
        records.append(octets + port.to_bytes(2, "big"))
    return encode_chunks(records, COMPACT_PEER_LEN)


def urlencode_bytes(raw: bytes) -> str:
    """
    Percent-encodes every byte as %HH, unreserved characters included.

    Used for info_hash, whose raw bytes are not text.
    """
    return ''.join(f'%{byte:02X}' for byte in raw)
