'''
Commands working on PNG files on disk: they are the glue between the
command line and the format, reading and writing the whole file each time.
'''
import logging
import sys
from pathlib import Path

from .exceptions import ChunkNotFoundException, PngmeException
from .png import PNGChunk, PNGFile
from .png.chunk_type import ChunkType


logger = logging.getLogger(__name__)


def load_png(path) -> PNGFile:
    logger.debug('loading \'%s\'', path)
    return PNGFile(Path(path).read_bytes())


def save_png(path, png: PNGFile) -> None:
    logger.debug('saving \'%s\'', path)
    Path(path).write_bytes(png.as_bytes())


def encode(path, chunk_type: str, message: str) -> PNGChunk:
    '''Append a chunk containing the message and rewrite the file.'''
    png = load_png(path)
    # arguments not valid UTF-8 arrive with surrogates, store their original bytes
    chunk = PNGChunk.new(ChunkType.from_str(chunk_type), message.encode('utf-8', errors='surrogateescape'))
    png.append_chunk(chunk)
    save_png(path, png)

    return chunk


def decode(path, chunk_type: str) -> str:
    '''Return the message contained in the first chunk of the given type.'''
    png = load_png(path)
    chunk = png.chunk_by_type(chunk_type)

    if chunk is None:
        raise ChunkNotFoundException(f'no chunk with type \'{chunk_type}\'')

    return chunk.data_as_string()


def remove(path, chunk_type: str) -> PNGChunk:
    '''Remove the first chunk of the given type and rewrite the file.'''
    png = load_png(path)
    chunk = png.remove_first_chunk(chunk_type)
    save_png(path, png)

    return chunk


def print_chunks(path) -> str:
    return load_png(path).render()


def usage(progname):
    print(f'''usage: {progname} <command> <png file path> [arguments...]

commands:
  encode <file> <chunk type> <message>   append the message in a chunk of the given type
  decode <file> <chunk type>             print the message in the first chunk of the given type
  remove <file> <chunk type>             remove the first chunk of the given type
  print  <file>                          print the messages contained in all the chunks''', file=sys.stderr)
    return 1


COMMANDS = {
    # name: (function, number of arguments after the command name)
    'encode': (encode, 3),
    'decode': (decode, 2),
    'remove': (remove, 2),
    'print': (print_chunks, 1),
}


def main(argv=None):
    argv = sys.argv if argv is None else argv
    progname = Path(argv[0]).name if argv else 'pngme'

    if len(argv) < 2 or argv[1] not in COMMANDS:
        return usage(progname)

    command, n_args = COMMANDS[argv[1]]
    args = argv[2:]

    if len(args) != n_args:
        return usage(progname)

    try:
        result = command(*args)
    except (PngmeException, OSError) as e:
        print(f'{progname}: {argv[1]} failed: {e}', file=sys.stderr)
        return 1

    if isinstance(result, str):
        print(result)
    else:
        logger.info('%s: chunk \'%s\' (%d bytes)', argv[1], result.chunk_type, result.length.value)

    return 0
