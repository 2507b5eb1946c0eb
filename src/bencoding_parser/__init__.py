"""
Bencode decoding into an immutable value tree.
"""
from .decoder import (
    MAX_DEPTH,
    BencodeDecodeError,
    BencodeDecoder,
    DuplicateKeyError,
    InvalidIntegerError,
    InvalidLengthPrefixError,
    LengthOutOfBoundsError,
    NestingTooDeepError,
    TrailingDataError,
    TruncatedInputError,
    UnexpectedTagError,
    UnsortedKeysError,
    decode_value,
)
from .document import Document, decode
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

__all__ = [
    'decode', 'decode_value', 'Document', 'BencodeDecoder', 'MAX_DEPTH',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
    'BencodeDecodeError', 'TruncatedInputError', 'InvalidLengthPrefixError',
    'InvalidIntegerError', 'UnexpectedTagError', 'LengthOutOfBoundsError',
    'NestingTooDeepError', 'UnsortedKeysError', 'DuplicateKeyError',
    'TrailingDataError',
]
