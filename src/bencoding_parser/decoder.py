"""
Bencode decoder.

Recursive descent over an immutable byte buffer. Each ``_parse_*`` routine
consumes the bytes of one value starting at the cursor and leaves the cursor
on the first unconsumed byte.
"""
import logging
import re

from .structure import (
    INT64_MAX,
    INT64_MIN,
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
)

logger = logging.getLogger(__name__)

MAX_DEPTH = 256

TOKEN_INTEGER = b"i"
TOKEN_LIST = b"l"
TOKEN_DICT = b"d"
TOKEN_END = b"e"
TOKEN_STRING_SEPARATOR = b":"

_INTEGER_RE = re.compile(rb"0|-?[1-9][0-9]*")
# Longest decimal that can still fit in a signed 64-bit integer
_INT64_DIGITS = 19


class BencodeDecodeError(Exception):
    """Base exception for Bencode decoding errors."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at byte {position})")
        self.position = position


class TruncatedInputError(BencodeDecodeError):
    """Buffer ended before a required delimiter or byte count."""


class InvalidLengthPrefixError(BencodeDecodeError):
    """String length field is not a well-formed non-negative decimal."""


class InvalidIntegerError(BencodeDecodeError):
    """Integer payload is malformed, non-canonical or out of range."""


class UnexpectedTagError(BencodeDecodeError):
    """A byte that starts no known value form was found where a value is required."""


class LengthOutOfBoundsError(BencodeDecodeError):
    """Declared string length exceeds the remaining buffer."""


class NestingTooDeepError(BencodeDecodeError):
    """Lists and dictionaries are nested deeper than the decoder allows."""


class UnsortedKeysError(BencodeDecodeError):
    """Strict mode: dictionary keys are not in ascending byte order."""


class DuplicateKeyError(BencodeDecodeError):
    """Strict mode: a dictionary key occurs more than once."""


class TrailingDataError(BencodeDecodeError):
    """Strict mode: bytes remain after the top-level value."""


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into Bencode values.

    In the default (lenient) mode dictionary keys may appear in any order,
    a repeated key keeps its last value and bytes after the top-level value
    are ignored. ``strict=True`` rejects all three, along with zero-padded
    string lengths.

    ``max_depth`` caps container nesting. Trees deeper than the default are
    walked recursively by ``to_python``, ``==`` and ``repr``, so a caller
    raising the cap also needs the recursion limit to match.
    """
    def __init__(self, data, strict: bool = False, max_depth: int = MAX_DEPTH):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError('Argument "data" must be bytes-like')
        if isinstance(max_depth, bool) or not isinstance(max_depth, int):
            raise TypeError('Argument "max_depth" must be an int')
        if max_depth < 0:
            raise ValueError('Argument "max_depth" must not be negative')
        self.data = bytes(data)
        self.strict = strict
        self.max_depth = max_depth
        self.i = 0  # cursor index
        self.depth = 0

    def decode(self):
        """Decodes one value of any type from the start of the data."""
        try:
            result = self._parse_value()
        except RecursionError as exc:
            raise NestingTooDeepError("Nesting exceeds the interpreter stack", self.i) from exc
        self._check_trailing()
        return result

    def decode_dict(self) -> BencodeDict:
        """Decodes the data as a top-level dictionary."""
        if self._peek() != TOKEN_DICT:
            raise UnexpectedTagError(
                f"Expected top-level dictionary, got {self._peek()!r}", self.i
            )
        try:
            result = self._parse_dict()
        except RecursionError as exc:
            raise NestingTooDeepError("Nesting exceeds the interpreter stack", self.i) from exc
        self._check_trailing()
        return result

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self) -> bytes:
        if self.i >= len(self.data):
            raise TruncatedInputError("Unexpected end of input", self.i)
        return self.data[self.i:self.i+1]

    def _consume(self, n=1) -> bytes:
        """Moves cursor forward by n bytes and returns the consumed chunk."""
        if self.i + n > len(self.data):
            raise TruncatedInputError("Unexpected end of input", len(self.data))
        chunk = self.data[self.i:self.i+n]
        self.i += n
        return chunk

    def _check_trailing(self):
        remaining = len(self.data) - self.i
        if not remaining:
            return
        if self.strict:
            raise TrailingDataError(f"{remaining} trailing bytes", self.i)
        logger.debug("Ignoring %d trailing bytes after offset %d", remaining, self.i)

    def _enter(self):
        self.depth += 1
        if self.depth > self.max_depth:
            raise NestingTooDeepError(
                f"Nesting exceeds maximum depth of {self.max_depth}", self.i
            )

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self):
        ch = self._peek()

        if ch == TOKEN_INTEGER:
            return self._parse_int()

        if ch.isdigit():  # Bencode strings start with length, which is a digit
            return self._parse_string()

        if ch == TOKEN_LIST:
            return self._parse_list()

        if ch == TOKEN_DICT:
            return self._parse_dict()

        raise UnexpectedTagError(f"Invalid token {ch!r}", self.i)

    def _parse_int(self) -> BencodeInt:
        """Parses an integer from the Bencoded data."""
        start = self.i
        self._consume(1)  # skip 'i'

        end_pos = self.data.find(TOKEN_END, self.i)
        if end_pos == -1:
            raise TruncatedInputError("Integer is missing its 'e' terminator", start)
        number_bytes = self.data[self.i:end_pos]

        if not _INTEGER_RE.fullmatch(number_bytes):
            raise InvalidIntegerError(f"Invalid integer {number_bytes!r}", start)
        if len(number_bytes.lstrip(b"-")) > _INT64_DIGITS:
            raise InvalidIntegerError("Integer out of 64-bit range", start)

        num = int(number_bytes)
        if not INT64_MIN <= num <= INT64_MAX:
            raise InvalidIntegerError("Integer out of 64-bit range", start)

        self.i = end_pos + 1  # skip 'e'
        return BencodeInt(num)

    def _parse_string(self) -> BencodeString:
        """Parses a byte string from the Bencoded data."""
        start = self.i
        # read length until ':'
        colon = self.i
        while colon < len(self.data) and self.data[colon:colon+1].isdigit():
            colon += 1
        if colon >= len(self.data):
            raise TruncatedInputError("String is missing its ':' separator", start)

        length_bytes = self.data[self.i:colon]
        if not length_bytes or self.data[colon:colon+1] != TOKEN_STRING_SEPARATOR:
            raise InvalidLengthPrefixError(
                f"Invalid string length {self.data[start:colon+1]!r}", start
            )
        if self.strict and len(length_bytes) > 1 and length_bytes.startswith(b"0"):
            raise InvalidLengthPrefixError("String length has a leading zero", start)

        self.i = colon + 1
        remaining = len(self.data) - self.i
        # int() is bounded by the digit count, anything longer cannot fit anyway
        significant = length_bytes.lstrip(b"0")
        if len(significant) > len(str(remaining)) or int(significant or b"0") > remaining:
            raise LengthOutOfBoundsError(
                f"String length {significant.decode() or '0'} exceeds the "
                f"{remaining} remaining bytes",
                start,
            )

        string_bytes = self._consume(int(significant or b"0"))
        return BencodeString(string_bytes)

    def _parse_list(self) -> BencodeList:
        """Parses a list from the Bencoded data."""
        self._enter()
        self._consume(1)  # skip 'l'
        items = []

        while self._peek() != TOKEN_END:
            items.append(self._parse_value())

        self._consume(1)  # skip 'e'
        self.depth -= 1
        return BencodeList(items)

    def _parse_dict(self) -> BencodeDict:
        """
        Parses a dictionary from the Bencoded data.

        A repeated key overwrites the earlier value unless the decoder is
        strict, in which case keys must be unique and sorted.
        """
        self._enter()
        self._consume(1)  # skip 'd'
        obj = {}
        last_key = None

        while self._peek() != TOKEN_END:
            key_pos = self.i
            # keys MUST be strings
            if not self._peek().isdigit():
                raise UnexpectedTagError(
                    f"Dictionary key must be a string, got {self._peek()!r}", key_pos
                )
            key = self._parse_string().value

            if self.strict and last_key is not None:
                if key == last_key or key in obj:
                    raise DuplicateKeyError(f"Duplicate key {key!r}", key_pos)
                if key < last_key:
                    raise UnsortedKeysError(
                        f"Key {key!r} sorts before {last_key!r}", key_pos
                    )
            last_key = key

            obj[key] = self._parse_value()

        self._consume(1)  # skip 'e'
        self.depth -= 1
        return BencodeDict(obj)


def decode_value(data, strict: bool = False, max_depth: int = MAX_DEPTH):
    """
    Convenience function to decode a single Bencoded value of any type.
    """
    return BencodeDecoder(data, strict=strict, max_depth=max_depth).decode()
