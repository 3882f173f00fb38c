from typing import Any, Type, TypeVar

from riffkit.kernel.container import MutableListChunk
from riffkit.kernel.errors import NotARiffFile
from riffkit.utils.fileio import read_file

_RiffT = TypeVar('_RiffT', bound='RiffContainer')


class RiffContainer(MutableListChunk):
    """Root chunk of a RIFF file."""

    TAG_RIFF = 'RIFF'
    TAG_ICMT = 'ICMT'
    TAG_ICOP = 'ICOP'
    TAG_IART = 'IART'
    TAG_INAM = 'INAM'

    @classmethod
    def from_path(cls: Type[_RiffT], path: str, **kwargs: Any) -> _RiffT:
        return cls.from_bytes(read_file(path), **kwargs)

    def _validate_header(self) -> None:
        super()._validate_header()
        if self.id != self.TAG_RIFF:
            raise NotARiffFile(self.id)
