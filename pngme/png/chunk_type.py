'''
# Chunk type codes

A chunk type is a four letters code; besides identifying the chunk, bit 5 of
each byte (the one making the difference between uppercase and lowercase in
ASCII) is a property bit

 1. ancillary bit (first byte): 0 (uppercase) means critical
 2. private bit (second byte): 0 (uppercase) means public
 3. reserved bit (third byte): must be 0 (uppercase) in this version of PNG
 4. safe-to-copy bit (fourth byte): 1 (lowercase) means safe to copy

See <http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html#Chunk-naming-conventions>.
'''
from bitstring import Bits

from ..exceptions import InvalidChunkTypeException


CHUNK_TYPE_LENGTH = 4


class ChunkType(object):
    '''Immutable four letters code identifying the type of a chunk.'''

    def __init__(self, code):
        code = bytes(code)

        if len(code) != CHUNK_TYPE_LENGTH:
            raise InvalidChunkTypeException(f'chunk type must be {CHUNK_TYPE_LENGTH} bytes long, got {code!r}')

        # bytes.isalpha() considers only ASCII letters
        if not code.isalpha():
            raise InvalidChunkTypeException(
                f'chunk type can only contain ascii alphabetical characters (A-Z and a-z), got {code!r}')

        self._code = code

    @classmethod
    def from_bytes(cls, raw) -> 'ChunkType':
        return cls(raw)

    @classmethod
    def from_str(cls, text: str) -> 'ChunkType':
        '''The length is counted in bytes of the UTF-8 encoding, not in characters.'''
        return cls(text.encode('utf-8'))

    def __bytes__(self):
        return self._code

    def __str__(self):
        return self._code.decode('ascii')

    def __repr__(self):
        return f'{self.__class__.__name__}({str(self)!r})'

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented

        return self._code == other._code

    def __hash__(self):
        return hash(self._code)

    def _property_bit(self, idx) -> bool:
        '''Return the bit 5 of the byte at position idx (bits are indexed MSB first).'''
        return bool(Bits.from_bytes(self._code)[idx * 8 + 2])

    def is_critical(self) -> bool:
        return not self._property_bit(0)

    def is_public(self) -> bool:
        return not self._property_bit(1)

    def is_reserved_bit_valid(self) -> bool:
        return not self._property_bit(2)

    def is_safe_to_copy(self) -> bool:
        return self._property_bit(3)

    def is_valid(self) -> bool:
        # the alphabetic constraint is enforced by the constructor
        return self.is_reserved_bit_valid()
