from typing import Any, NamedTuple, Type, TypeVar

from riffkit.utils.fileio import write_file

from .codec import HEADER, BufferLike, encode, parse_header, validate_id
from .errors import FieldMismatch, NotNulTerminated, TrailingOrMissingData

_ChunkT = TypeVar('_ChunkT', bound='Chunk')

NUL = b'\0'


class ChunkRecord(NamedTuple):
    """Explicit chunk fields

    id: 4CC tag

    size: declared payload size

    data: payload
    """

    id: str
    size: int
    data: BufferLike


class Chunk(object):
    """Validated (id, size, data) triple.

    Construct from explicit fields, from a record or from raw bytes.
    """

    def __init__(self, tag: str, size: int, data: BufferLike) -> None:
        validate_id(tag)
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise FieldMismatch('size', 'non-negative int', size)
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise FieldMismatch('data', 'bytes', type(data).__name__)
        if len(data) != size:
            raise FieldMismatch('size', len(data), size)
        self._id = tag
        self._size = size
        self._data = bytes(data)

    @classmethod
    def from_bytes(cls: Type[_ChunkT], buffer: BufferLike, **kwargs: Any) -> _ChunkT:
        """Read chunk spanning exactly the given buffer."""
        header = parse_header(buffer)
        if HEADER.size + header.size != len(buffer):
            raise TrailingOrMissingData(HEADER.size + header.size, len(buffer))
        return cls(header.etag, header.size, header.payload, **kwargs)

    @classmethod
    def from_record(cls: Type[_ChunkT], record: ChunkRecord, **kwargs: Any) -> _ChunkT:
        return cls(record.id, record.size, record.data, **kwargs)

    @property
    def id(self) -> str:
        return self._id

    @property
    def size(self) -> int:
        return self._size

    @property
    def data(self) -> Any:
        return self._data

    @property
    def raw_data(self) -> bytes:
        return self._data

    def dump(self) -> bytes:
        return encode(self._id, self._size, self.raw_data)

    def dump_to_file(self, path: str) -> int:
        return write_file(path, self.dump())

    def __bytes__(self) -> bytes:
        return self.dump()

    def __len__(self) -> int:
        return HEADER.size + self._size

    def __repr__(self) -> str:
        return '{cls}<{tag}>[{size}]'.format(
            cls=type(self).__name__, tag=self._id, size=self._size
        )


class BinaryChunk(Chunk):
    @classmethod
    def from_binary(cls: Type[_ChunkT], tag: str, data: BufferLike) -> _ChunkT:
        return cls(tag, len(data), data)


class StringChunk(BinaryChunk):
    """NUL-terminated string chunk.

    Payload must contain a single NUL byte at its end.
    Text is UTF-8, undecodable bytes are kept as surrogates.
    """

    ENCODING = 'utf-8'
    ERRORS = 'surrogateescape'

    def __init__(self, tag: str, size: int, data: BufferLike) -> None:
        super().__init__(tag, size, data)
        if self._data.count(NUL) != 1 or not self._data.endswith(NUL):
            raise NotNulTerminated(self._data)

    @classmethod
    def from_string(cls, tag: str, text: str) -> 'StringChunk':
        try:
            payload = text.encode(cls.ENCODING, cls.ERRORS)
        except UnicodeEncodeError as exc:
            raise FieldMismatch('data', f'{cls.ENCODING} text', text) from exc
        return cls.from_binary(tag, payload + NUL)

    @property
    def data(self) -> str:
        return self._data[:-1].decode(self.ENCODING, self.ERRORS)
