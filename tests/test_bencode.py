import pytest

from bencode.decoder import (
    BencodeDecoder,
    MalformedEncoding,
    TruncatedInput,
    decode,
    decode_prefix,
)
from bencode.display import InvalidText, project
from bencode.encoder import encode
from bencode.structure import BencodeInt, BencodeString, BencodeList, BencodeDict


def test_int():
    print("Testing integer decoding...")
    obj = decode(b"i52e")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeInt)
    assert obj.value == 52

    print("Testing integer encoding...")
    enc = encode(obj)
    print("Re-encoded:", enc)
    assert enc == b"i52e"


def test_negative_and_zero_int():
    assert decode(b"i-42e").value == -42
    assert decode(b"i0e").value == 0
    assert encode(-42) == b"i-42e"


@pytest.mark.parametrize("raw", [b"i-0e", b"i03e", b"ie", b"i-e", b"i1.5e", b"i 1e"])
def test_int_rejects_non_canonical(raw):
    with pytest.raises(MalformedEncoding):
        decode(raw)


def test_string():
    print("Testing string decoding...")
    obj = decode(b"5:hello")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeString)
    assert obj.value == b"hello"

    print("Testing string encoding...")
    assert encode(obj) == b"5:hello"
    assert encode("hello") == b"5:hello"
    assert decode(b"0:").value == b""


def test_string_binary_payload():
    raw = bytes(range(256))
    obj = decode(encode(raw))
    assert obj.value == raw


def test_list():
    print("Testing list decoding...")
    obj = decode(b"l4:spam4:eggse")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeList)
    assert obj.value == [BencodeString(b"spam"), BencodeString(b"eggs")]
    assert project(obj) == ["spam", "eggs"]


def test_dict():
    print("Testing dictionary decoding & encoding...")
    obj = decode(b"d3:cow3:moo4:spam4:eggse")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeDict)
    assert obj.value[b"cow"].value == b"moo"
    assert project(obj) == {"cow": "moo", "spam": "eggs"}
    enc = encode(obj)
    print("Re-encoded:", enc)
    assert enc == b"d3:cow3:moo4:spam4:eggse"


def test_dict_unsorted_input_is_accepted_and_canonicalised():
    obj = decode(b"d4:spam4:eggs3:cow3:mooe")
    assert list(obj.value) == [b"spam", b"cow"]
    assert encode(obj) == b"d3:cow3:moo4:spam4:eggse"


def test_dict_keys_sorted_by_raw_bytes():
    # b"Z" (0x5a) sorts before b"a" (0x61); b"ab" after b"a"
    assert encode({b"a": 1, b"ab": 2, b"Z": 3}) == b"d1:Zi3e1:ai1e2:abi2ee"
    assert encode({"b": 1, b"a": 2}) == b"d1:ai2e1:bi1ee"


def test_encode_is_idempotent():
    value = {b"name": b"x", b"list": [1, -2, b"three", {b"k": []}], b"n": 0}
    first = encode(value)
    assert encode(decode(first)) == first


def test_insertion_order_does_not_change_encoding():
    a = BencodeDict({b"x": BencodeInt(1), b"y": BencodeInt(2)})
    b = BencodeDict({b"y": BencodeInt(2), b"x": BencodeInt(1)})
    assert encode(a) == encode(b)


def test_encode_rejects_unsupported_types():
    with pytest.raises(TypeError):
        encode(True)
    with pytest.raises(TypeError):
        encode(1.5)
    with pytest.raises(TypeError):
        encode({1: b"x"})


@pytest.mark.parametrize("raw", [b"", b"i42", b"5:hell", b"l4:spam", b"d3:cow", b"d3:cow3:moo", b"12"])
def test_truncated_input(raw):
    with pytest.raises(TruncatedInput):
        decode(raw)


@pytest.mark.parametrize("raw", [b"x", b"i1ex", b"5-hello", b"di1e3:mooe", b"le1"])
def test_malformed_input(raw):
    with pytest.raises(MalformedEncoding):
        decode(raw)


def test_decode_prefix_returns_remaining_bytes():
    value, rest = decode_prefix(b"i42e5:hello")
    assert value == BencodeInt(42)
    assert rest == b"5:hello"

    value, rest = decode_prefix(b"4:spam")
    assert value == BencodeString(b"spam")
    assert rest == b""


def test_nesting_depth_is_bounded():
    hostile = b"l" * 100_000 + b"e" * 100_000
    with pytest.raises(MalformedEncoding):
        decode(hostile)

    assert BencodeDecoder(b"llleee", max_depth=3).decode() is not None
    with pytest.raises(MalformedEncoding):
        BencodeDecoder(b"llllee" + b"ee", max_depth=3).decode()


def test_error_reports_position():
    with pytest.raises(MalformedEncoding) as info:
        decode(b"l4:spamxe")
    assert info.value.position == 7


def test_project_rejects_non_utf8():
    with pytest.raises(InvalidText) as info:
        project(decode(b"2:\xff\xfe"))
    assert info.value.raw == b"\xff\xfe"

    with pytest.raises(InvalidText):
        project(decode(b"d2:\xff\xfei1ee"))


def test_project_nested():
    obj = decode(b"d4:infod6:lengthi10ee4:listli1ei2eee")
    assert project(obj) == {"info": {"length": 10}, "list": [1, 2]}
