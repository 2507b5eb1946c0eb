"""
Data structures for representing decoded Bencode values.
"""
from types import MappingProxyType

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "INT64_MIN",
    "INT64_MAX",
]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class BencodeType:
    """Base class for all Bencode data types. Instances are immutable."""
    __slots__ = ("_value",)

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, value):
        if name != "_value" or hasattr(self, "_value"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        object.__setattr__(self, name, value)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __repr__(self):
        return f"{type(self).__name__}({self._value!r})"

    def to_python(self):
        """Returns the payload as plain bytes / int / list / dict objects."""
        return self._value


class BencodeInt(BencodeType):
    """Represents a Bencoded signed 64-bit integer."""
    __slots__ = ()

    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError("BencodeInt value out of 64-bit range.")
        self._value = value

    def __hash__(self):
        return hash((BencodeInt, self._value))


class BencodeString(BencodeType):
    """Represents a Bencoded byte string. The payload is never text-decoded."""
    __slots__ = ()

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes.")
        self._value = bytes(value)

    def __hash__(self):
        return hash((BencodeString, self._value))

    def __len__(self):
        return len(self._value)


class BencodeList(BencodeType):
    """Represents a Bencoded list. Items are kept in a tuple."""
    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, (list, tuple)):
            raise TypeError("BencodeList requires a list.")
        for item in value:
            if not isinstance(item, BencodeType):
                raise TypeError("BencodeList items must be Bencode values.")
        self._value = tuple(value)

    __hash__ = None

    def __len__(self):
        return len(self._value)

    def __iter__(self):
        return iter(self._value)

    def __getitem__(self, index):
        return self._value[index]

    def to_python(self):
        return [item.to_python() for item in self._value]


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary.

    Keys are raw byte strings. Insertion order is preserved and the mapping
    is exposed through a read-only view.
    """
    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, (dict, MappingProxyType)):
            raise TypeError("BencodeDict requires a dict.")
        entries = {}
        for k, v in value.items():
            # keys must be bytes (bencode requirement)
            if not isinstance(k, (bytes, bytearray)):
                raise TypeError("BencodeDict keys must be bytes.")
            if not isinstance(v, BencodeType):
                raise TypeError("BencodeDict values must be Bencode values.")
            entries[bytes(k)] = v
        self._value = MappingProxyType(entries)

    __hash__ = None

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return dict(self._value) == dict(other._value)

    def __repr__(self):
        return f"BencodeDict({dict(self._value)!r})"

    def __len__(self):
        return len(self._value)

    def __iter__(self):
        return iter(self._value)

    def __contains__(self, key):
        return key in self._value

    def __getitem__(self, key):
        return self._value[key]

    def get(self, key, default=None):
        return self._value.get(key, default)

    def to_python(self):
        return {k: v.to_python() for k, v in self._value.items()}
