from typing import Any


class RIFFError(ValueError):
    """Base error for invalid RIFF structures."""


class InvalidId(RIFFError):
    def __init__(self, tag: Any) -> None:
        super().__init__(f'Not a valid RIFF ID: {tag!r}')
        self.tag = tag


class MalformedHeader(RIFFError):
    def __init__(self, expected: int, given: int) -> None:
        super().__init__(
            f'Chunk header requires buffer of at least {expected} bytes but got {given}'
        )
        self.expected = expected
        self.given = given


class TrailingOrMissingData(RIFFError):
    def __init__(self, expected: int, given: int) -> None:
        super().__init__(f'Expected chunk data of size {expected} but got size {given}')
        self.expected = expected
        self.given = given


class FieldMismatch(RIFFError):
    def __init__(self, field: str, expected: Any, given: Any) -> None:
        super().__init__(f'Inconsistent chunk {field}: expected {expected}, got {given}')
        self.field = field
        self.expected = expected
        self.given = given


class NotNulTerminated(RIFFError):
    def __init__(self, payload: bytes) -> None:
        super().__init__(f'Expected exactly one trailing NUL in {payload!r}')
        self.payload = payload


class NotARiffFile(RIFFError):
    def __init__(self, tag: str) -> None:
        super().__init__(f'Not a RIFF file: root tag is {tag!r}')
        self.tag = tag


class NotAWebPImage(RIFFError):
    def __init__(self, reason: str) -> None:
        super().__init__(f'Not a WebP image: {reason}')
        self.reason = reason


class UnknownChunkType(RIFFError):
    def __init__(self, tag: str, ptype: str) -> None:
        super().__init__(f'Unknown chunk type {tag!r} in {ptype} container')
        self.tag = tag
        self.ptype = ptype


class DuplicateChunk(RIFFError):
    def __init__(self, tag: str, ptype: str) -> None:
        super().__init__(f'Duplicate chunk {tag!r} in {ptype} container')
        self.tag = tag
        self.ptype = ptype
