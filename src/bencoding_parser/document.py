"""
Decoded Bencode document: a single top-level dictionary.
"""
import logging
from typing import Iterator, Optional

from .decoder import MAX_DEPTH, BencodeDecoder
from .structure import BencodeDict, BencodeType

logger = logging.getLogger(__name__)


class Document:
    """
    Holds the top-level dictionary of a decoded Bencode buffer.

    Lookups only search the top level, nested dictionaries are reached
    through the returned ``BencodeDict`` values. All values are immutable,
    so they can be handed out without copying.
    """
    def __init__(self, root: BencodeDict):
        if not isinstance(root, BencodeDict):
            raise TypeError("Document root must be a BencodeDict.")
        self._root = root

    @property
    def root(self) -> BencodeDict:
        return self._root

    @staticmethod
    def _key_to_bytes(key) -> bytes:
        if isinstance(key, str):
            return key.encode()
        if isinstance(key, (bytes, bytearray, memoryview)):
            return bytes(key)
        raise TypeError(f"Document keys must be bytes, not {type(key).__name__}")

    def get(self, key, default=None) -> Optional[BencodeType]:
        """Returns the top-level value stored under ``key``, or ``default``."""
        return self._root.get(self._key_to_bytes(key), default)

    def keys(self):
        return self._root.value.keys()

    def to_python(self) -> dict:
        return self._root.to_python()

    def __contains__(self, key) -> bool:
        return self._key_to_bytes(key) in self._root

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._root)

    def __len__(self) -> int:
        return len(self._root)

    def __eq__(self, other):
        if not isinstance(other, Document):
            return NotImplemented
        return self._root == other._root

    __hash__ = None

    def __repr__(self):
        return f"Document(keys={list(self._root)!r})"


def decode(data, strict: bool = False, max_depth: int = MAX_DEPTH) -> Document:
    """
    Decodes a Bencoded buffer whose top-level value is a dictionary.

    Bytes after the dictionary are ignored unless ``strict`` is set.
    Raises a ``BencodeDecodeError`` subclass on malformed input.
    """
    decoder = BencodeDecoder(data, strict=strict, max_depth=max_depth)
    root = decoder.decode_dict()
    logger.debug("Decoded document with %d keys from %d bytes", len(root), decoder.i)
    return Document(root)
