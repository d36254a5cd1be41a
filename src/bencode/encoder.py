"""
Canonical bencode encoder for BitTorrent metainfo and tracker messages.

The output is the unique canonical form: dictionary keys sorted by raw bytes,
integers without leading zeros, strings length-prefixed. Info hashes depend on
this being byte-exact.
"""
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString


def encode(obj) -> bytes:
    """Encodes a Python object, BencodeType or schema record into bencoded bytes."""

    if isinstance(obj, bool):
        raise TypeError("Cannot bencode a boolean")

    if isinstance(obj, (int, BencodeInt)):
        value = obj if isinstance(obj, int) else obj.value
        return encode_int(value)

    if isinstance(obj, (str, BencodeString)):
        if isinstance(obj, str):
            return encode_str(obj)
        # BencodeString wraps bytes
        return encode_bytes(obj.value)

    if isinstance(obj, (bytes, bytearray)):
        return encode_bytes(bytes(obj))

    if isinstance(obj, (list, tuple, BencodeList)):
        value = obj.value if isinstance(obj, BencodeList) else obj
        return encode_list(value)

    if isinstance(obj, (dict, BencodeDict)):
        value = obj if isinstance(obj, dict) else obj.value
        return encode_dict(value)

    # Schema records (Torrent, Info, ...) describe their own bencode shape
    to_bencode = getattr(obj, "to_bencode", None)
    if callable(to_bencode):
        return encode(to_bencode())

    raise TypeError(f"Cannot bencode object of type {type(obj)}")


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return b"i%de" % n


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode() + b":" + b


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    b = s.encode()
    return encode_bytes(b)


def encode_list(lst) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    encoded_items = b''.join(encode(x) for x in lst)
    return b"l" + encoded_items + b"e"


def _key_to_bytes(k) -> bytes:
    if isinstance(k, str):
        return k.encode()
    if isinstance(k, (bytes, bytearray)):
        return bytes(k)
    raise TypeError(f"Dictionary keys must be bytes or str, not {type(k)}")


def encode_dict(d: dict) -> bytes:
    """Encodes a dictionary to bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse)."""
    items = {}
    for key, value in d.items():
        key_bytes = _key_to_bytes(key)
        if key_bytes in items:
            raise ValueError(f"Duplicate dictionary key {key_bytes!r}")
        items[key_bytes] = value

    parts = [b"d"]
    for key_bytes in sorted(items):
        parts.append(encode_bytes(key_bytes))
        parts.append(encode(items[key_bytes]))
    parts.append(b"e")

    return b"".join(parts)
