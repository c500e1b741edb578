import pytest

from pngme.commands import (
    decode,
    encode,
    main,
    print_chunks,
    remove,
)
from pngme.exceptions import (
    ChunkNotFoundException,
    EncodingException,
    InvalidChunkTypeException,
)
from pngme.png import PNGChunk, PNGFile


@pytest.fixture
def red_png_path(tmp_path, red_png):
    path = tmp_path / 'red.png'
    path.write_bytes(red_png)

    return path


def test_encode_decode(red_png_path, red_png):
    chunk = encode(red_png_path, 'RuSt', 'secret message')

    assert str(chunk.chunk_type) == 'RuSt'
    assert decode(red_png_path, 'RuSt') == 'secret message'
    assert red_png_path.read_bytes() == red_png + chunk.raw


def test_encode_invalid_type(red_png_path, red_png):
    with pytest.raises(InvalidChunkTypeException):
        encode(red_png_path, 'Ru1t', 'secret message')

    assert red_png_path.read_bytes() == red_png


def test_decode_missing(red_png_path):
    with pytest.raises(ChunkNotFoundException):
        decode(red_png_path, 'RuSt')


def test_remove(red_png_path, red_png):
    encode(red_png_path, 'RuSt', 'first')
    encode(red_png_path, 'RuSt', 'second')

    removed = remove(red_png_path, 'RuSt')

    assert removed.data_as_string() == 'first'
    assert decode(red_png_path, 'RuSt') == 'second'

    remove(red_png_path, 'RuSt')

    assert red_png_path.read_bytes() == red_png

    with pytest.raises(ChunkNotFoundException):
        remove(red_png_path, 'RuSt')


def test_print_chunks(tmp_path):
    path = tmp_path / 'text.png'
    path.write_bytes(PNGFile.from_chunks([
        PNGChunk.new('FrSt', b'hello'),
        PNGChunk.new('SeCd', b'world'),
    ]).as_bytes())

    assert print_chunks(path) == 'hello\nworld'


def test_print_chunks_binary(red_png_path):
    # the compressed image data is not text
    with pytest.raises(EncodingException):
        print_chunks(red_png_path)


def test_main_usage(capsys):
    assert main(['pngme_cli.py']) == 1
    assert 'usage: pngme_cli.py' in capsys.readouterr().err

    assert main(['pngme_cli.py', 'unknown', 'file.png']) == 1
    assert main(['pngme_cli.py', 'decode', 'file.png']) == 1
    assert main(['pngme_cli.py', 'print', 'file.png', 'RuSt']) == 1


def test_main_encode_decode(red_png_path, capsys):
    assert main(['pngme_cli.py', 'encode', str(red_png_path), 'RuSt', 'hello']) == 0
    assert main(['pngme_cli.py', 'decode', str(red_png_path), 'RuSt']) == 0
    assert capsys.readouterr().out == 'hello\n'

    assert main(['pngme_cli.py', 'remove', str(red_png_path), 'RuSt']) == 0
    assert main(['pngme_cli.py', 'decode', str(red_png_path), 'RuSt']) == 1
    assert 'decode failed' in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main(['pngme_cli.py', 'print', str(tmp_path / 'missing.png')]) == 1
    assert 'print failed' in capsys.readouterr().err


def test_main_not_a_png(tmp_path, capsys):
    path = tmp_path / 'text.txt'
    path.write_bytes(b'not a png at all')

    assert main(['pngme_cli.py', 'decode', str(path), 'RuSt']) == 1
    assert 'expected magic' in capsys.readouterr().err


def test_encode_undecodable_argument(red_png_path, red_png):
    # what Python makes of the argument b'caf\xe9'
    message = b'caf\xe9'.decode('utf-8', errors='surrogateescape')

    chunk = encode(red_png_path, 'RuSt', message)

    assert chunk.data.value == b'caf\xe9'
    assert red_png_path.read_bytes() == red_png + chunk.raw

    with pytest.raises(EncodingException):
        decode(red_png_path, 'RuSt')


def test_main_encode_undecodable_argument(red_png_path):
    message = b'caf\xe9'.decode('utf-8', errors='surrogateescape')

    assert main(['pngme_cli.py', 'encode', str(red_png_path), 'RuSt', message]) == 0
