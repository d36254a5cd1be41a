import pytest

from torrent.fields import InvalidLength
from tracker.errors import TrackerProtocolError, UnsupportedPeerFormat
from tracker.messages import TrackerResponse
from tracker.utils import PeerAddress


def test_decode_response():
    body = b"d8:intervali900e5:peers12:\xa5\xe8\x21\x4d\xc9\x0b\x7f\x00\x00\x01\x1a\xe1e"
    resp = TrackerResponse.from_bytes(body)
    print("Decoded:", resp)

    assert resp.interval == 900
    assert resp.peers == [PeerAddress("165.232.33.77", 51467), PeerAddress("127.0.0.1", 6881)]
    assert resp.complete is None


def test_optional_fields(caplog):
    body = (
        b"d8:completei5e10:incompletei2e8:intervali60e5:peers6:\x01\x02\x03\x04\x1a\xe1"
        b"15:warning message9:slow down"
        b"e"
    )
    resp = TrackerResponse.from_bytes(body)

    assert (resp.complete, resp.incomplete) == (5, 2)
    assert resp.warning_message == "slow down"
    assert "slow down" in caplog.text


def test_ragged_peers_yield_no_peers():
    body = b"d8:intervali900e5:peers7:\x01\x02\x03\x04\x1a\xe1\x05e"
    with pytest.raises(TrackerProtocolError) as info:
        TrackerResponse.from_bytes(body)
    assert isinstance(info.value.__cause__, InvalidLength)


def test_missing_interval():
    with pytest.raises(TrackerProtocolError):
        TrackerResponse.from_bytes(b"d5:peers0:e")


def test_missing_peers():
    with pytest.raises(TrackerProtocolError):
        TrackerResponse.from_bytes(b"d8:intervali900ee")


def test_response_not_a_dictionary():
    with pytest.raises(TrackerProtocolError):
        TrackerResponse.from_bytes(b"li900ee")


def test_dictionary_peer_model_unsupported():
    with pytest.raises(UnsupportedPeerFormat):
        TrackerResponse.from_bytes(b"d8:intervali900e5:peerslee")
