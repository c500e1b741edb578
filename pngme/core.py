"""
Core module for the abstraction of a file format

"""
from typing import Dict, List, Tuple

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import PngmeException
from .properties import (
    get_root_from_chunk,
    ChunkPhase,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: the fields
    declared as class attributes are packed/unpacked in the order of declaration.

    A Chunk can contain sub-chunks, so it can be used itself as a field.

    Passing some binary data to the constructor unpacks it.
    """

    def __init__(self, source=None, **kwargs):
        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if source is not None:
            stream = Stream(source)
            self.logger.debug('unpacking \'%s\' from %r', self.__class__.__name__, stream)
            self.unpack(stream)

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_value(self) -> Dict[str, object]:
        return {name: field.value for name, field in self.get_fields()}

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    def _get_size(self):
        '''the size parameter MUST not be set but MUST be derived from the subchunks'''
        return sum(field.size for _, field in self.get_fields())

    def _get_raw(self):
        value = b''
        for field_name, field_instance in self.get_fields():
            field_raw = field_instance.raw
            self.logger.debug("field '%s' raw=%r", field_name, field_raw)
            value += field_raw

        return value

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        '''The offset and the size of each field, relative to the start of this chunk.'''
        result = {}
        offset = 0
        for name, field in self.get_fields():
            size = field.size
            result[name] = (offset, size)
            offset += size

        return result

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        Each field reads from the stream as many bytes as it needs, so at the
        end the stream is positioned right after this chunk. If a field fails the
        exception propagates, with the name of the field added to its chain.
        '''
        self._phase = ChunkPhase.UNPACKING
        for field_name, field in self.get_fields():
            field.offset = stream.tell()
            self.logger.debug('unpacking %s.%s at offset 0x%x', self.__class__.__name__, field_name, field.offset)

            try:
                field.unpack(stream)
            except PngmeException as e:
                e.chain.append(field_name)
                raise

        self._phase = ChunkPhase.DONE
