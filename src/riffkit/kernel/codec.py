import re
from struct import Struct
from typing import NamedTuple, Union

import deal

from .errors import InvalidId, MalformedHeader

BufferLike = Union[bytes, bytearray, memoryview]

# tag is 4CC, size is little-endian u32 and excludes the header itself
HEADER = Struct('<4sI')
MIN_CHUNK_SIZE = HEADER.size + 1
MAX_CHUNK_SIZE = 0xFFFFFFFF

TAG_ENCODING = 'latin-1'
ID_PATTERN = re.compile(r'[0-9A-Za-z_ ]{4}')


class ChunkHeader(NamedTuple):
    etag: str
    size: int
    payload: BufferLike


def _declared_end(buffer: BufferLike) -> int:
    _, size = HEADER.unpack_from(buffer)
    return HEADER.size + size


@deal.chain(
    deal.raises(MalformedHeader),
    deal.reason(
        MalformedHeader,
        lambda _: len(_.buffer) < MIN_CHUNK_SIZE
        or _declared_end(_.buffer) > len(_.buffer),
    ),
    deal.ensure(lambda _: len(_.result.payload) == _.result.size),
    deal.has(),
)
def parse_header(buffer: BufferLike) -> ChunkHeader:
    """Read single chunk header from start of given buffer.

    Returns tag, declared size and a slice of the payload.
    Bytes after the payload are ignored.
    """
    if len(buffer) < MIN_CHUNK_SIZE:
        raise MalformedHeader(MIN_CHUNK_SIZE, len(buffer))
    etag, size = HEADER.unpack_from(buffer)
    end = HEADER.size + size
    if end > len(buffer):
        raise MalformedHeader(end, len(buffer))
    return ChunkHeader(etag.decode(TAG_ENCODING), size, buffer[HEADER.size : end])


@deal.chain(
    deal.pre(lambda _: 0 <= _.size <= MAX_CHUNK_SIZE),
    deal.ensure(lambda _: len(_.result) == HEADER.size + len(_.payload)),
    deal.pure,
)
def encode(tag: str, size: int, payload: BufferLike) -> bytes:
    """Create chunk bytes from given tag, size and payload."""
    return HEADER.pack(tag.encode(TAG_ENCODING), size) + bytes(payload)


@deal.chain(
    deal.raises(InvalidId),
    deal.reason(
        InvalidId,
        lambda _: not isinstance(_.tag, str) or not ID_PATTERN.fullmatch(_.tag),
    ),
    deal.has(),
)
def validate_id(tag: str) -> str:
    if not isinstance(tag, str) or not ID_PATTERN.fullmatch(tag):
        raise InvalidId(tag)
    return tag
