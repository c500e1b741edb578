'''
# Portable Network Graphics

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html>.

Here we are not interested in the image itself, only in the container: chunks
are kept as opaque data so that it's possible to hide messages inside a PNG file
by means of custom chunks without corrupting the image.
'''
from typing import Iterable, List, Optional

from pngme.core import Chunk
from pngme import fields
from pngme.common import crc
from pngme.meta import Endianess
from pngme.properties import Dependency
from pngme.exceptions import ChunkNotFoundException, EncodingException

from .chunk_type import ChunkType, CHUNK_TYPE_LENGTH
from .utils import get_chunk_index_by_name, get_chunks_by_name


PNG_SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'

# the length is stored in an unsigned 32 bits integer
PNG_CHUNK_MAX_LENGTH = 0xffffffff


class ChunkTypeField(fields.Field):
    '''Field containing a ChunkType, it can be set with a string or with raw bytes too.'''

    def _set_value(self, value) -> None:
        if isinstance(value, str):
            value = ChunkType.from_str(value)
        elif value is not None and not isinstance(value, ChunkType):
            value = ChunkType.from_bytes(value)

        self._value = value

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.value)

    def _get_size(self):
        return CHUNK_TYPE_LENGTH

    def _get_raw(self) -> bytes:
        if self.value is None:
            raise ValueError(f'the field \'{self.name}\' has no chunk type set')

        return bytes(self.value)

    def unpack(self, stream):
        self.value = ChunkType.from_bytes(stream.read(CHUNK_TYPE_LENGTH))


class PNGHeader(Chunk):
    magic = fields.StringField(default=PNG_SIGNATURE, is_magic=True)


class PNGChunk(Chunk):
    '''
    This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    The length is the number of bytes of the data field (not of the chunk itself).

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    Both the length and the crc are derived from the other fields, so after
    changing the data the chunk packs correctly without further intervention.
    '''
    length = fields.SizeOfField('data', endianess=Endianess.BIG_ENDIAN)
    type   = ChunkTypeField()
    data   = fields.StringField(Dependency('.length'), max_length=PNG_CHUNK_MAX_LENGTH)
    crc    = crc.CRCField(['type', 'data'], endianess=Endianess.BIG_ENDIAN)  # network byte order

    @classmethod
    def new(cls, chunk_type, data: bytes) -> 'PNGChunk':
        chunk = cls()
        chunk.type = chunk_type
        chunk.data = data

        return chunk

    def __eq__(self, other):
        if not isinstance(other, PNGChunk):
            return NotImplemented

        return self.chunk_type == other.chunk_type and self.data.value == other.data.value

    def __str__(self):
        return self.data_as_string()

    @property
    def chunk_type(self) -> ChunkType:
        return self.type.value

    def data_as_string(self) -> str:
        try:
            return self.data.value.decode('utf-8')
        except UnicodeDecodeError as e:
            raise EncodingException(f'the data of the chunk \'{self.chunk_type}\' is not valid UTF-8 text') from e


class PNGFile(Chunk):
    '''A PNG file: the signature followed by all the chunks until the end of the data.

    The order of the chunks is the order they have in the file.'''
    header = PNGHeader()
    chunks = fields.ArrayField(PNGChunk())

    @classmethod
    def from_chunks(cls, chunks: Iterable[PNGChunk]) -> 'PNGFile':
        png = cls()
        for chunk in chunks:
            png.append_chunk(chunk)

        return png

    def __str__(self):
        return self.render()

    def append_chunk(self, chunk: PNGChunk) -> None:
        self.chunks.append(chunk)

    def chunk_by_type(self, chunk_type: str) -> Optional[PNGChunk]:
        idx = get_chunk_index_by_name(self.chunks, chunk_type)

        return self.chunks[idx] if idx is not None else None

    def chunks_by_type(self, chunk_type: str) -> List[PNGChunk]:
        return get_chunks_by_name(self.chunks, chunk_type)

    def remove_first_chunk(self, chunk_type: str) -> PNGChunk:
        idx = get_chunk_index_by_name(self.chunks, chunk_type)

        if idx is None:
            raise ChunkNotFoundException(f'no chunk with type \'{chunk_type}\'')

        return self.chunks.pop(idx)

    def as_bytes(self) -> bytes:
        return self.pack()

    def render(self) -> str:
        '''Textual representation of the data of each chunk, one for line.

        All the chunks must contain text, otherwise EncodingException is raised.'''
        return '\n'.join(chunk.data_as_string() for chunk in self.chunks)
