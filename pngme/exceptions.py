class PngmeException(Exception):
    '''Base class to extend in order to throw exception in pngme.

    Other than the message, it takes an argument that represents the chain
    of the fields that caused the exception, the innermost first.
    '''

    def __init__(self, message='', chain=None):
        self.message = message
        self.chain = chain if chain is not None else []
        super().__init__(message)

    @property
    def path(self):
        return '.'.join(reversed(self.chain))

    def __str__(self):
        if not self.chain:
            return self.message

        return f'{self.message} (at {self.path})'


class UnpackException(PngmeException):
    pass


class MagicException(UnpackException):
    pass


class TruncatedException(UnpackException):
    '''There are not enough bytes in the stream.'''
    pass


class CRCException(UnpackException):

    def __init__(self, declared, calculated, chain=None):
        self.declared = declared
        self.calculated = calculated
        super().__init__(
            f'CRC mismatch: declared 0x{declared:08x}, calculated 0x{calculated:08x}',
            chain=chain)


class InvalidChunkTypeException(PngmeException, ValueError):
    pass


class EncodingException(PngmeException):
    '''The data is not valid text.'''
    pass


class ChunkNotFoundException(PngmeException, LookupError):
    pass


class ValueTooLargeException(PngmeException, ValueError):
    '''The value can't be represented by the field that should contain it.'''
    pass
