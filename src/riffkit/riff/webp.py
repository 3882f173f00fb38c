from typing import Any, ClassVar, Dict, Mapping, Optional, Type

from riffkit.kernel.chunk import BinaryChunk, Chunk, ChunkRecord, StringChunk
from riffkit.kernel.errors import NotAWebPImage, UnknownChunkType

from .riff import RiffContainer


class WebP(RiffContainer):
    """WebP image with optional RIFF INFO-style metadata.

    The VP8 image chunk is opaque and must come first.
    """

    TAG_WEBP = 'WEBP'
    TAG_VP8 = 'VP8 '

    METADATA_TAGS = (
        RiffContainer.TAG_ICMT,
        RiffContainer.TAG_ICOP,
        RiffContainer.TAG_IART,
        RiffContainer.TAG_INAM,
    )

    CHUNK_TYPES: ClassVar[Mapping[str, Type[Chunk]]] = {
        TAG_VP8: BinaryChunk,
        **{tag: StringChunk for tag in METADATA_TAGS},
    }

    @classmethod
    def from_image_bytes(cls, data: bytes, **kwargs: Any) -> 'WebP':
        """Wrap VP8 bitstream in minimal WebP container."""
        image = BinaryChunk.from_binary(cls.TAG_VP8, data)
        return cls.from_chunks(cls.TAG_RIFF, cls.TAG_WEBP, [image], **kwargs)

    def new_chunk(self, record: ChunkRecord) -> Chunk:
        factory = self.CHUNK_TYPES.get(record.id)
        if factory is None:
            raise UnknownChunkType(record.id, self.type)
        return factory.from_record(record)

    def _validate_header(self) -> None:
        super()._validate_header()
        if self.type != self.TAG_WEBP:
            raise NotAWebPImage(f'format type is {self.type!r}')

    def _validate_chunks(self) -> None:
        super()._validate_chunks()
        first = next(iter(self._chunks), None)
        if first != self.TAG_VP8:
            raise NotAWebPImage(f'expected first chunk {self.TAG_VP8!r} but got {first!r}')

    def set_chunk(self, chunk: Chunk) -> None:
        """Insert chunk retyped by tag, as if read from file."""
        super().set_chunk(self.new_chunk(ChunkRecord(chunk.id, chunk.size, chunk.raw_data)))

    def delete_chunk(self, tag: str) -> None:
        if tag == self.TAG_VP8:
            raise NotAWebPImage('image chunk cannot be removed')
        super().delete_chunk(tag)

    def get_vp8_image(self) -> Optional[bytes]:
        return self.get_chunk_data(self.TAG_VP8)

    def get_comment(self) -> Optional[str]:
        return self.get_chunk_data(self.TAG_ICMT)

    def get_copyright(self) -> Optional[str]:
        return self.get_chunk_data(self.TAG_ICOP)

    def get_artist(self) -> Optional[str]:
        return self.get_chunk_data(self.TAG_IART)

    def get_title(self) -> Optional[str]:
        return self.get_chunk_data(self.TAG_INAM)

    def set_comment(self, text: Optional[str]) -> None:
        self._set_metadata(self.TAG_ICMT, text)

    def set_copyright(self, text: Optional[str]) -> None:
        self._set_metadata(self.TAG_ICOP, text)

    def set_artist(self, text: Optional[str]) -> None:
        self._set_metadata(self.TAG_IART, text)

    def set_title(self, text: Optional[str]) -> None:
        self._set_metadata(self.TAG_INAM, text)

    def clear_metadata(self) -> None:
        for tag in self.METADATA_TAGS:
            self.delete_chunk(tag)

    def _set_metadata(self, tag: str, text: Optional[str]) -> None:
        if text is None:
            self.delete_chunk(tag)
        else:
            self.set_chunk(StringChunk.from_string(tag, text))


def read_metadata(webp: WebP) -> Dict[str, str]:
    """Map each metadata tag present in given image to its text."""
    return {tag: chunk.data for tag, chunk in webp.data.items() if tag != WebP.TAG_VP8}


def webp_read_metadata(path: str) -> Dict[str, str]:
    return read_metadata(WebP.from_path(path))
