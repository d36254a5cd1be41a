"""
Codecs for fixed-width binary fields carried inside bencode byte strings.
"""
from typing import Iterable, List

from bencode.decoder import BencodeDecodeError

PIECE_HASH_LEN = 20


class InvalidLength(BencodeDecodeError):
    """A fixed-width field is not a whole number of records."""
    def __init__(self, length: int, width: int):
        super().__init__(f"Length {length} is not a multiple of {width}")
        self.length = length
        self.width = width


def decode_chunks(data: bytes, width: int) -> List[bytes]:
    """
    Splits ``data`` into consecutive ``width``-byte records.

    Raises InvalidLength if the data does not divide evenly; nothing is
    returned for the complete records in that case.
    """
    if width <= 0:
        raise ValueError("width must be positive")
    if len(data) % width != 0:
        raise InvalidLength(len(data), width)
    return [bytes(data[i:i + width]) for i in range(0, len(data), width)]


def encode_chunks(chunks: Iterable[bytes], width: int) -> bytes:
    out = []
    for chunk in chunks:
        if len(chunk) != width:
            raise ValueError(f"Expected a {width}-byte record, got {len(chunk)} bytes")
        out.append(bytes(chunk))
    return b"".join(out)


def split_piece_hashes(blob: bytes) -> List[bytes]:
    """Decodes the ``pieces`` field into its 20-byte SHA-1 hashes."""
    return decode_chunks(blob, PIECE_HASH_LEN)


def join_piece_hashes(hashes: Iterable[bytes]) -> bytes:
    return encode_chunks(hashes, PIECE_HASH_LEN)
