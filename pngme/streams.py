import io
import logging

from .exceptions import TruncatedException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around in-memory binary data to
    uniform its properties: reading past the end of the data
    is an error and not a short read.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise TypeError(f'\'{self._type.__name__}\' is not a supported kind of stream')

        init_method()

    def __repr__(self):
        return f'<{self.__class__.__name__}(size={self.size}, offset={self.tell()})>'

    def init_bytes(self):
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_memoryview(self):
        self.obj = io.BytesIO(self.obj.tobytes())

    @property
    def size(self):
        return len(self.obj.getbuffer())

    def tell(self):
        return self.obj.tell()

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.obj.seek(offset)

    def read(self, size):
        offset = self.tell()
        data = self.obj.read(size)

        if len(data) != size:
            raise TruncatedException(
                f'expected {size} bytes at offset 0x{offset:x} but only {len(data)} are available')

        return data

    def is_eof(self):
        return self.tell() >= self.size
