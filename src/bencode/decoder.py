"""
Bencode decoder for BitTorrent metainfo and tracker responses.
"""
import re
from typing import Tuple

from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

DEFAULT_MAX_DEPTH = 256

# i<body>e: "0", or an optionally negative number without leading zeros
_INT_RE = re.compile(rb"0|-?[1-9][0-9]*")


class BencodeDecodeError(ValueError):
    """Base class for all Bencode decoding errors."""
    def __init__(self, message: str, position: int = None):
        if position is not None:
            message = f"{message} (at byte {position})"
        super().__init__(message)
        self.position = position


class MalformedEncoding(BencodeDecodeError):
    """Input does not match any bencode production at the current position."""


class TruncatedInput(BencodeDecodeError):
    """Input ended before a declared length or terminator."""


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into Python objects.

    Dictionary keys are accepted in any order, since trackers and other
    clients are not always canonical producers.
    """
    def __init__(self, data: bytes, max_depth: int = DEFAULT_MAX_DEPTH):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Cannot decode object of type {type(data)}")
        self.data = bytes(data)
        self.i = 0  # cursor index
        self.depth = 0
        self.max_depth = max_depth

    def decode(self) -> BencodeType:
        """Main decode entry point. Decodes the entire Bencoded data."""
        result = self._parse_value()
        if self.i != len(self.data):
            raise MalformedEncoding("Trailing data after value", self.i)
        return result

    def decode_prefix(self) -> Tuple[BencodeType, bytes]:
        """Decodes a single value and returns it with the unconsumed bytes."""
        result = self._parse_value()
        return result, self.data[self.i:]

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self):
        if self.i >= len(self.data):
            raise TruncatedInput("Unexpected end of input", self.i)
        return self.data[self.i:self.i+1]

    def _consume(self, n=1):
        """Moves cursor forward by n bytes and returns the consumed chunk."""
        if self.i + n > len(self.data):
            raise TruncatedInput(
                f"Expected {n} bytes, only {len(self.data) - self.i} left", self.i
            )
        chunk = self.data[self.i:self.i+n]
        self.i += n
        return chunk

    def _enter(self):
        self.depth += 1
        if self.depth > self.max_depth:
            raise MalformedEncoding(f"Nesting deeper than {self.max_depth} levels", self.i)

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self):
        ch = self._peek()

        if ch == b'i':
            return self._parse_int()

        if ch.isdigit(): # Bencode strings start with length, which is a digit
            return self._parse_string()

        if ch == b'l':
            return self._parse_list()

        if ch == b'd':
            return self._parse_dict()

        raise MalformedEncoding(f"Invalid token {ch!r}", self.i)

    def _parse_int(self):
        """Parses an integer from the Bencoded data."""
        start = self.i
        self._consume(1)  # skip 'i'

        end_pos = self.data.find(b'e', self.i)
        if end_pos == -1:
            raise TruncatedInput("Unterminated integer", start)

        number_bytes = self.data[self.i:end_pos]
        if not _INT_RE.fullmatch(number_bytes):
            raise MalformedEncoding(f"Invalid integer {number_bytes[:32]!r}", start)

        try:
            num = int(number_bytes)
        except ValueError as exc:
            raise MalformedEncoding("Integer too large", start) from exc

        self.i = end_pos + 1  # skip 'e'
        return BencodeInt(num)

    def _parse_string(self):
        """Parses a byte string from the Bencoded data."""
        start = self.i
        # read length until ':'
        colon = self.i
        while colon < len(self.data) and self.data[colon:colon+1].isdigit():
            colon += 1

        if colon >= len(self.data):
            raise TruncatedInput("Unterminated string length", start)
        if self.data[colon:colon+1] != b':' or colon == start:
            raise MalformedEncoding("Invalid string length", start)

        try:
            length = int(self.data[start:colon])
        except ValueError as exc:
            raise MalformedEncoding("Invalid string length", start) from exc

        self.i = colon + 1
        string_bytes = self._consume(length)

        return BencodeString(string_bytes)

    def _parse_list(self):
        """Parses a list from the Bencoded data."""
        self._enter()
        self._consume(1)  # skip 'l'
        items = []

        while self._peek() != b'e':
            items.append(self._parse_value())

        self._consume(1)  # skip 'e'
        self.depth -= 1
        return BencodeList(items)

    def _parse_dict(self):
        """Parses a dictionary from the Bencoded data."""
        self._enter()
        self._consume(1)  # skip 'd'
        obj = {}

        while self._peek() != b'e':
            # keys MUST be strings
            if not self._peek().isdigit():
                raise MalformedEncoding("Dictionary key must be a byte string", self.i)
            key = self._parse_string().value
            value = self._parse_value()
            obj[key] = value

        self._consume(1)  # skip 'e'
        self.depth -= 1
        return BencodeDict(obj)


def decode(data: bytes) -> BencodeType:
    """
    Convenience function to decode Bencoded data.
    """
    return BencodeDecoder(data).decode()


def decode_prefix(data: bytes) -> Tuple[BencodeType, bytes]:
    """
    Decodes the value at the start of ``data``.

    Returns the value and whatever bytes follow it.
    """
    return BencodeDecoder(data).decode_prefix()
