import pytest

from riffkit.kernel.chunk import BinaryChunk, Chunk, ChunkRecord, StringChunk
from riffkit.kernel.codec import encode
from riffkit.kernel.errors import (
    FieldMismatch,
    InvalidId,
    MalformedHeader,
    NotNulTerminated,
    TrailingOrMissingData,
)


def test_from_bytes():
    buffer = encode('VP8 ', 4, b'\x01\x02\x03\x04')
    chunk = BinaryChunk.from_bytes(buffer)
    assert chunk.id == 'VP8 '
    assert chunk.size == 4
    assert chunk.data == b'\x01\x02\x03\x04'
    assert chunk.raw_data == chunk.data
    assert chunk.dump() == buffer
    assert bytes(chunk) == buffer
    assert len(chunk) == 12


def test_from_bytes_trailing_data():
    buffer = encode('VP8 ', 4, b'abcd') + b'\0'
    with pytest.raises(TrailingOrMissingData) as exc_info:
        BinaryChunk.from_bytes(buffer)
    assert exc_info.value.expected == 12
    assert exc_info.value.given == 13


def test_from_bytes_missing_data():
    buffer = encode('VP8 ', 8, b'abcd')
    with pytest.raises(MalformedHeader):
        BinaryChunk.from_bytes(buffer)


def test_from_record():
    chunk = Chunk.from_record(ChunkRecord('ICMT', 2, b'a\0'))
    assert (chunk.id, chunk.size, chunk.data) == ('ICMT', 2, b'a\0')


@pytest.mark.parametrize(
    'size, data',
    [(3, b'ab'), (-1, b''), ('2', b'ab'), (True, b'a'), (2, 'ab'), (0, None)],
)
def test_field_mismatch(size, data):
    with pytest.raises(FieldMismatch):
        Chunk('VP8 ', size, data)


def test_invalid_id():
    with pytest.raises(InvalidId):
        Chunk('VP8', 0, b'')


def test_from_binary():
    chunk = BinaryChunk.from_binary('VP8 ', b'image')
    assert isinstance(chunk, BinaryChunk)
    assert chunk.size == 5
    assert chunk.dump() == b'VP8 \x05\x00\x00\x00image'


def test_from_binary_invalid_id():
    with pytest.raises(InvalidId):
        BinaryChunk.from_binary('VP8+', b'image')


def test_string_chunk():
    chunk = StringChunk.from_string('INAM', 'Hi')
    assert chunk.size == 3
    assert chunk.data == 'Hi'
    assert chunk.raw_data == b'Hi\0'
    assert chunk.dump() == b'INAM\x03\x00\x00\x00Hi\x00'


def test_string_chunk_empty_text():
    chunk = StringChunk.from_string('ICMT', '')
    assert chunk.size == 1
    assert chunk.data == ''


def test_string_chunk_from_bytes():
    chunk = StringChunk.from_bytes(encode('IART', 4, b'Bob\0'))
    assert chunk.data == 'Bob'


@pytest.mark.parametrize('payload', [b'abc\0def', b'abc', b'abc\0\0', b'\0abc\0', b''])
def test_string_chunk_not_nul_terminated(payload):
    with pytest.raises(NotNulTerminated) as exc_info:
        StringChunk.from_binary('ICMT', payload)
    assert exc_info.value.payload == payload


def test_string_chunk_embedded_nul_text():
    with pytest.raises(NotNulTerminated):
        StringChunk.from_string('ICMT', 'abc\0def')


def test_string_chunk_unicode():
    chunk = StringChunk.from_string('INAM', 'café')
    assert chunk.raw_data == 'café'.encode('utf-8') + b'\0'
    assert StringChunk.from_bytes(chunk.dump()).data == 'café'


def test_string_chunk_undecodable_bytes():
    chunk = StringChunk.from_binary('ICMT', b'\xff\xfe\0')
    assert StringChunk.from_string('ICMT', chunk.data).dump() == chunk.dump()


def test_repr():
    assert repr(BinaryChunk.from_binary('VP8 ', b'ab')) == 'BinaryChunk<VP8 >[2]'


def test_dump_to_file(tmp_path):
    path = tmp_path / 'chunk.bin'
    chunk = StringChunk.from_string('INAM', 'Hi')
    assert chunk.dump_to_file(str(path)) == 11
    assert path.read_bytes() == chunk.dump()


def test_string_chunk_unencodable_text():
    with pytest.raises(FieldMismatch) as exc_info:
        StringChunk.from_string('ICMT', 'bad \ud800')
    assert exc_info.value.given == 'bad \ud800'
