import pytest

from torrent.fields import (
    InvalidLength,
    decode_chunks,
    encode_chunks,
    join_piece_hashes,
    split_piece_hashes,
)
from tracker.utils import PeerAddress, compact_to_peers, peers_to_compact, urlencode_bytes


def test_decode_chunks_in_order():
    data = bytes(range(12))
    chunks = decode_chunks(data, 4)
    assert chunks == [bytes([0, 1, 2, 3]), bytes([4, 5, 6, 7]), bytes([8, 9, 10, 11])]


@pytest.mark.parametrize("width", [1, 6, 20])
def test_decode_chunks_empty(width):
    assert decode_chunks(b"", width) == []


@pytest.mark.parametrize("length,width", [(7, 6), (19, 20), (21, 20), (1, 6)])
def test_decode_chunks_rejects_ragged_input(length, width):
    with pytest.raises(InvalidLength) as info:
        decode_chunks(b"x" * length, width)
    assert info.value.length == length
    assert info.value.width == width


def test_encode_chunks_rejects_wrong_width():
    with pytest.raises(ValueError):
        encode_chunks([b"abc", b"de"], 3)


def test_piece_hashes():
    blob = b"a" * 20 + b"b" * 20 + b"c" * 20
    hashes = split_piece_hashes(blob)
    assert hashes == [b"a" * 20, b"b" * 20, b"c" * 20]
    assert join_piece_hashes(hashes) == blob


def test_compact_peers():
    blob = b"\xa5\xe8\x21\x4d\xc9\x0b" + b"\x7f\x00\x00\x01\x1a\xe1"
    peers = compact_to_peers(blob)
    print("Peers:", peers)

    assert peers == [PeerAddress("165.232.33.77", 51467), PeerAddress("127.0.0.1", 6881)]
    assert [str(p) for p in peers] == ["165.232.33.77:51467", "127.0.0.1:6881"]
    assert peers_to_compact(peers) == blob


def test_compact_peers_port_is_big_endian():
    peers = compact_to_peers(b"\x0a\x00\x00\x02\x00\x01")
    assert peers[0].port == 1


def test_compact_peers_ragged_yields_nothing():
    with pytest.raises(InvalidLength):
        compact_to_peers(b"\x01\x02\x03\x04\x1a\xe1\x05")


def test_compact_peers_empty():
    assert compact_to_peers(b"") == []


def test_urlencode_bytes_escapes_every_byte():
    assert urlencode_bytes(b"\x00\x0f\xffA-") == "%00%0F%FF%41%2D"
    assert urlencode_bytes(b"") == ""
    assert len(urlencode_bytes(bytes(20))) == 60
