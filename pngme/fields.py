"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable from a stream.
"""
import logging
import struct

from .meta import FieldBase, Endianess
from .properties import Dependency, ChunkPhase
from .exceptions import (
    MagicException,
    PngmeException,
    TruncatedException,
    ValueTooLargeException,
)


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None, endianess=Endianess.LITTLE_ENDIAN):
        super().__init__()
        self._phase = ChunkPhase.INIT
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = None
        self.endianess = endianess

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def _get_value(self):
        return self._value

    def _set_value(self, value) -> None:
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
    )

    def pack(self) -> bytes:
        return self.raw

    def unpack(self, stream):
        raise NotImplementedError(f"method {self.__class__.__name__}.unpack() not implemented")


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        value = self.value
        try:
            return struct.pack(self.get_format(), value)
        except struct.error as e:
            raise ValueTooLargeException(
                f'value {value} doesn\'t fit the format \'{self.get_format()}\'') from e

    def unpack(self, stream):
        raw = stream.read(self.size)
        self.value = struct.unpack(self.get_format(), raw)[0]


class SizeOfField(StructField):
    """Integer field containing the size in bytes of a sibling field.

    The value is derived from the sibling each time is accessed, the value read
    from the stream is used only while unpacking (usually to resolve a Dependency
    on this very field)."""

    def __init__(self, field_name, format='I', **kw):
        self.field_name = field_name
        super().__init__(format, **kw)

    def _get_value(self):
        if self.father is None or self.father._phase == ChunkPhase.UNPACKING:
            return self._value

        return getattr(self.father, self.field_name).size


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    The length can be fixed or a Dependency from another field; with "is_magic"
    the value read from the stream must match the default one."""

    def __init__(self, n=None, max_length=None, is_magic=False, **kw):
        if n is None and kw.get('default') is None:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self.n = n if n is not None else len(kw['default'])
        self.max_length = max_length
        self.is_magic = is_magic

        super().__init__(**kw)

    def value_from_default(self):
        if self.default is not None:
            return self.default

        return b'' if isinstance(self.n, Dependency) else b'\x00' * self.n

    def get_length(self):
        return self.n.resolve(self) if isinstance(self.n, Dependency) else self.n

    def _set_value(self, value) -> None:
        """With a fixed length we must follow that indication, otherwise the Dependency
        is going to be derived from us."""
        # bytes(5) would be five zero bytes
        if isinstance(value, int):
            raise TypeError(f'field \'{self.name}\' accepts only binary data, not \'{value.__class__.__name__}\'')

        value = bytes(value)
        length = len(value)

        if not isinstance(self.n, Dependency) and length != self.n:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.n} bytes)')

        if self.max_length is not None and length > self.max_length:
            raise ValueTooLargeException(
                f'{length} bytes is over the maximum length allowed of {self.max_length} bytes')

        self._value = value

    def _get_size(self):
        return len(self.value)

    def _get_raw(self):
        return self.value

    def unpack(self, stream):
        if not self.is_magic:
            self.value = stream.read(self.get_length())
            return

        try:
            self.value = stream.read(self.get_length())
        except TruncatedException as e:
            raise MagicException(f'expected magic {self.default!r}, the data is too short') from e

        if self.value != self.default:
            self.logger.debug('the magic doesn\'t correspond: %r', self.value)
            raise MagicException(f'expected magic {self.default!r}, found {self.value!r}')


class ArrayField(Field):
    '''Un/Pack an array of Chunks.

    The elements are unpacked one after the other until the stream is exhausted.

    This class must behave like a list in python, obviously cannot implement all the methods
    since, for example, slicing what should mean?
    '''

    def __init__(self, field_cls, **kw):
        self.field_cls = field_cls

        super().__init__(**kw)

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return list(self.default) if self.default else []

    def _get_raw(self):
        return b''.join(element.raw for element in self.value)

    def _get_size(self):
        return sum(element.size for element in self.value)

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack(self, stream):
        value = []

        while not stream.is_eof():
            idx = len(value)
            element = self.instance_element()
            element.offset = stream.tell()

            self.logger.debug('unpacking element %d at offset 0x%x', idx, element.offset)

            try:
                element.unpack(stream)
            except PngmeException as e:
                e.chain.append(str(idx))
                raise

            value.append(element)

        self.value = value

    def append(self, element):
        element.father = self
        self.value.append(element)

    def pop(self, idx):
        element = self.value.pop(idx)
        element.father = None

        return element
