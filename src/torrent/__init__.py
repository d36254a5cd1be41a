"""
Torrent metainfo schema and info-hash computation.
"""
from .fields import InvalidLength, decode_chunks, encode_chunks, join_piece_hashes, split_piece_hashes
from .metainfo import Info, InvalidField, MissingField, Torrent

__all__ = [
    'Torrent',
    'Info',
    'MissingField',
    'InvalidField',
    'InvalidLength',
    'decode_chunks',
    'encode_chunks',
    'split_piece_hashes',
    'join_piece_hashes',
]
