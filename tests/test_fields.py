import pytest

from pngme.core import Chunk
from pngme.exceptions import (
    MagicException,
    TruncatedException,
    ValueTooLargeException,
)
from pngme.fields import StructField, StringField, SizeOfField, ArrayField
from pngme.meta import Endianess
from pngme.properties import Dependency
from pngme.streams import Stream


class Record(Chunk):
    sz = SizeOfField('payload', format='B')
    payload = StringField(Dependency('.sz'))


def test_structfield_conversion_raw_value():
    """Check that the attributes "value" and "raw" are the analogous
    of the integers and bytes representation for a field."""
    field = StructField('I')

    assert field.size == 4
    assert field.raw == b'\x00\x00\x00\x00'
    assert field.value == 0

    field.value = 0xcafe

    assert field.value == 0xcafe
    assert field.raw == b'\xfe\xca\x00\x00'


def test_structfield_big_endian():
    field = StructField('I', default=0x2a, endianess=Endianess.BIG_ENDIAN)

    assert field.raw == b'\x00\x00\x00\x2a'


def test_structfield_unpack():
    field = StructField('I', endianess=Endianess.BIG_ENDIAN)
    stream = Stream(b'\x00\x00\x01\x00\xff')

    field.unpack(stream)

    assert field.value == 0x100
    assert stream.tell() == 4

    with pytest.raises(TruncatedException):
        field.unpack(stream)


def test_structfield_value_too_large():
    field = StructField('I')
    field.value = 1 << 32

    with pytest.raises(ValueTooLargeException):
        field.raw


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert len(field.raw) == field.size
    assert field.raw == b'\x00' * field.size

    with pytest.raises(ValueError):
        field.value = b'kebab'

    data = bytes(range(0x10))

    field.value = data

    assert field.value == data
    assert field.raw == data


def test_stringfield_needs_a_length():
    with pytest.raises(ValueError):
        StringField()


def test_stringfield_max_length():
    field = StringField(Dependency('.length'), max_length=4)

    field.value = b'abcd'

    with pytest.raises(ValueTooLargeException):
        field.value = b'abcde'

    assert field.value == b'abcd'


def test_stringfield_magic():
    field = StringField(default=b'MAGIC', is_magic=True)
    field.unpack(Stream(b'MAGIC'))

    assert field.value == b'MAGIC'

    with pytest.raises(MagicException):
        StringField(default=b'MAGIC', is_magic=True).unpack(Stream(b'MAGIK'))

    # too short to contain the magic
    with pytest.raises(MagicException):
        StringField(default=b'MAGIC', is_magic=True).unpack(Stream(b'MAG'))


def test_sizeoffield_follows_sibling():
    record = Record()

    assert record.sz.value == 0

    record.payload = b'kebab'

    assert record.sz.value == 5
    assert record.raw == b'\x05kebab'


def test_arrayfield_unpack():
    array = ArrayField(Record())

    array.unpack(Stream(b'\x02ab\x00\x03xyz'))

    assert len(array) == 3
    assert [_.payload.value for _ in array] == [b'ab', b'', b'xyz']
    assert [_.offset for _ in array] == [0, 3, 4]
    assert array.raw == b'\x02ab\x00\x03xyz'
    assert array.size == 8

    # check that the elements are not duplicated
    assert array[0] is not array[1]
    assert array[0].father is array


def test_arrayfield_truncated_element():
    array = ArrayField(Record())

    with pytest.raises(TruncatedException) as exc:
        array.unpack(Stream(b'\x02ab\x05xyz'))

    assert exc.value.chain == ['payload', '1']


def test_arrayfield_append_pop():
    array = ArrayField(Record())

    first = Record()
    first.payload = b'one'
    second = Record()
    second.payload = b'two'

    array.append(first)
    array.append(second)

    assert first.father is array
    assert array.raw == b'\x03one\x03two'

    popped = array.pop(0)

    assert popped is first
    assert popped.father is None
    assert popped.sz.value == 3
    assert len(array) == 1
    assert array.raw == b'\x03two'


def test_stringfield_rejects_integers():
    field = StringField(Dependency('.length'))

    with pytest.raises(TypeError):
        field.value = 5

    assert field.value == b''
