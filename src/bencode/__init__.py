"""
Bencode package for encoding and decoding BitTorrent data.
"""
from .decoder import (
    BencodeDecodeError,
    BencodeDecoder,
    MalformedEncoding,
    TruncatedInput,
    decode,
    decode_prefix,
)
from .display import InvalidText, project
from .encoder import encode
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

__all__ = [
    'decode',
    'decode_prefix',
    'encode',
    'project',
    'BencodeDecoder',
    'BencodeType',
    'BencodeInt',
    'BencodeString',
    'BencodeList',
    'BencodeDict',
    'BencodeDecodeError',
    'MalformedEncoding',
    'TruncatedInput',
    'InvalidText',
]
