from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Type, TypeVar

from .chunk import Chunk, ChunkRecord
from .codec import (
    HEADER,
    MAX_CHUNK_SIZE,
    MIN_CHUNK_SIZE,
    TAG_ENCODING,
    BufferLike,
    parse_header,
    validate_id,
)
from .errors import DuplicateChunk, FieldMismatch, MalformedHeader, TrailingOrMissingData
from .settings import _ChunkSetting, preset

_ListChunkT = TypeVar('_ListChunkT', bound='ListChunk')

TYPE_SIZE = 4


def read_records(buffer: BufferLike) -> Iterator[Tuple[int, ChunkRecord]]:
    """Read all chunk records from given bytes.

    Records must cover the buffer exactly.
    """
    data = memoryview(buffer)
    offset = 0
    while offset < len(data):
        try:
            header = parse_header(data[offset:])
        except MalformedHeader as exc:
            raise TrailingOrMissingData(offset + exc.expected, len(data)) from exc
        yield offset, ChunkRecord(header.etag, header.size, header.payload)
        offset += HEADER.size + header.size


class ListChunk(Chunk, ABC):
    """Chunk containing a type tag followed by sub-chunks.

    Sub-chunks are keyed by tag, a later duplicate replaces the earlier one
    in place. Size is kept equal to the encoded length of type and children.
    """

    def __init__(
        self,
        tag: str,
        size: int,
        data: BufferLike,
        *,
        cfg: _ChunkSetting = preset,
    ) -> None:
        super().__init__(tag, size, data)
        ptype = validate_id(self._data[:TYPE_SIZE].decode(TAG_ENCODING))
        region = memoryview(self._data)[TYPE_SIZE:]
        self._populate(
            ptype,
            (self.new_chunk(record) for _, record in read_records(region)),
            cfg,
        )

    @classmethod
    def from_chunks(
        cls: Type[_ListChunkT],
        tag: str,
        ptype: str,
        chunks: Iterable[Chunk],
        *,
        cfg: _ChunkSetting = preset,
    ) -> _ListChunkT:
        """Create list chunk directly from constructed children."""
        self = cls.__new__(cls)
        self._id = validate_id(tag)
        self._populate(ptype, chunks, cfg)
        return self

    def _populate(self, ptype: str, chunks: Iterable[Chunk], cfg: _ChunkSetting) -> None:
        self.cfg = cfg
        self._data = validate_id(ptype).encode(TAG_ENCODING)
        self._size = TYPE_SIZE
        self._chunks: Dict[str, Chunk] = {}
        self._validate_header()
        for chunk in chunks:
            self._adopt(chunk)
        self._validate_chunks()

    def _adopt(self, chunk: Chunk) -> None:
        if chunk.id in self._chunks:
            if self.cfg.strict:
                raise DuplicateChunk(chunk.id, self.type)
            # later chunk wins, earlier data is lost
            self.cfg.logger.warning(
                'duplicate %s chunk in %s container, dropping earlier one',
                chunk.id,
                self.type,
            )
        self.cfg.logger.debug('%s: read %s chunk of size %d', self.type, chunk.id, chunk.size)
        self._put(chunk)

    def _put(self, chunk: Chunk) -> None:
        # children must stay readable by parse_header
        if len(chunk) < MIN_CHUNK_SIZE:
            raise MalformedHeader(MIN_CHUNK_SIZE, len(chunk))
        old = self._chunks.get(chunk.id)
        size = self._size + len(chunk) - (len(old) if old is not None else 0)
        if size > MAX_CHUNK_SIZE:
            raise FieldMismatch('size', f'at most {MAX_CHUNK_SIZE}', size)
        self._chunks[chunk.id] = chunk
        self._size = size

    def _pop(self, tag: str) -> Optional[Chunk]:
        chunk = self._chunks.pop(tag, None)
        if chunk is not None:
            self._size -= len(chunk)
        return chunk

    def _validate_header(self) -> None:
        """Check id and type before children are read."""

    def _validate_chunks(self) -> None:
        """Check children once all were read."""

    @abstractmethod
    def new_chunk(self, record: ChunkRecord) -> Chunk:
        ...

    @property
    def type(self) -> str:
        return self._data.decode(TAG_ENCODING)

    @property
    def data(self) -> Mapping[str, Chunk]:
        return MappingProxyType(self._chunks)

    @property
    def raw_data(self) -> bytes:
        return self._data + b''.join(chunk.dump() for chunk in self._chunks.values())

    def get_chunk(self, tag: str) -> Optional[Chunk]:
        return self._chunks.get(tag)

    def get_chunk_data(self, tag: str) -> Any:
        chunk = self.get_chunk(tag)
        if chunk is None:
            return None
        return chunk.data

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self._chunks.values())

    def __contains__(self, tag: object) -> bool:
        return tag in self._chunks

    def __repr__(self) -> str:
        children = ','.join(self._chunks)
        return f'{type(self).__name__}<{self.id}:{self.type}>[{self.size}, children={{{children}}}]'


class MutableListChunk(ListChunk):
    def set_chunk(self, chunk: Chunk) -> None:
        """Insert chunk or replace existing chunk with the same tag."""
        self._put(chunk)
        self.cfg.logger.debug('%s: set %s chunk of size %d', self.type, chunk.id, chunk.size)

    def delete_chunk(self, tag: str) -> None:
        """Remove chunk with given tag, if present."""
        if self._pop(tag) is not None:
            self.cfg.logger.debug('%s: deleted %s chunk', self.type, tag)
