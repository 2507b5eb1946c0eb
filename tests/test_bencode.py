import pytest

from bencoding_parser.decoder import decode_value
from bencoding_parser.structure import BencodeInt, BencodeString, BencodeList, BencodeDict


def test_string():
    obj = decode_value(b"4:spam")
    assert isinstance(obj, BencodeString)
    assert obj.value == b"spam"


def test_empty_string():
    assert decode_value(b"0:") == BencodeString(b"")


def test_binary_string_is_not_text_decoded():
    payload = b"\xab\xa3\xda\x89\xfc"
    obj = decode_value(b"5:" + payload)
    assert obj.value == payload


def test_utf8_string_keeps_raw_bytes():
    obj = decode_value("15:Víctor Colombo".encode())
    assert obj.value == "Víctor Colombo".encode()


@pytest.mark.parametrize(
    "encoded,expected",
    [
        (b"i5e", 5),
        (b"i-18e", -18),
        (b"i42e", 42),
        (b"i0e", 0),
        (b"i9223372036854775807e", 2 ** 63 - 1),
        (b"i-9223372036854775808e", -(2 ** 63)),
    ],
)
def test_int(encoded, expected):
    obj = decode_value(encoded)
    assert isinstance(obj, BencodeInt)
    assert obj.value == expected


def test_list():
    obj = decode_value(b"l5:elem1i42ee")
    assert isinstance(obj, BencodeList)
    assert obj == BencodeList([BencodeString(b"elem1"), BencodeInt(42)])
    assert obj.to_python() == [b"elem1", 42]


def test_empty_list():
    obj = decode_value(b"le")
    assert isinstance(obj, BencodeList)
    assert len(obj) == 0


def test_nested_list():
    assert decode_value(b"ll4:spamee").to_python() == [[b"spam"]]


def test_dict():
    obj = decode_value(b"d3:cow3:moo4:spam4:eggse")
    assert isinstance(obj, BencodeDict)
    assert obj.value[b"cow"].value == b"moo"
    assert obj[b"spam"] == BencodeString(b"eggs")


def test_empty_dict():
    obj = decode_value(b"de")
    assert isinstance(obj, BencodeDict)
    assert len(obj) == 0


def test_complex_structure():
    data = (
        b"d8:announce15:http://tracker/4:infod5:filesld6:lengthi12345e"
        b"4:pathl3:dir8:file.txteee4:name4:test12:piece lengthi262144eee"
    )
    assert decode_value(data).to_python() == {
        b"announce": b"http://tracker/",
        b"info": {
            b"files": [{b"length": 12345, b"path": [b"dir", b"file.txt"]}],
            b"name": b"test",
            b"piece length": 262144,
        },
    }


def test_dict_preserves_insertion_order():
    obj = decode_value(b"d1:bi1e1:ai2e1:ci3ee")
    assert list(obj) == [b"b", b"a", b"c"]


def test_duplicate_key_last_wins():
    obj = decode_value(b"d1:a1:x1:a1:ye")
    assert len(obj) == 1
    assert obj[b"a"].value == b"y"


def test_zero_padded_length_is_accepted():
    assert decode_value(b"03:abc").value == b"abc"


def test_values_are_immutable():
    obj = decode_value(b"d1:ali1ei2eee")
    with pytest.raises(AttributeError):
        obj.value = {}
    with pytest.raises(TypeError):
        obj.value[b"b"] = BencodeInt(3)
    assert isinstance(obj[b"a"].value, tuple)


def test_int_range_checked():
    with pytest.raises(ValueError):
        BencodeInt(2 ** 63)
    with pytest.raises(TypeError):
        BencodeInt("1")


def test_structure_type_checks():
    with pytest.raises(TypeError):
        BencodeString("text")
    with pytest.raises(TypeError):
        BencodeDict({"key": BencodeInt(1)})
    with pytest.raises(TypeError):
        BencodeList([1, 2])


def test_leaf_values_are_hashable():
    assert len({BencodeInt(1), BencodeInt(1), BencodeString(b"1")}) == 2
    assert BencodeInt(1) != BencodeString(b"1")
