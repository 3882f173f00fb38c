import io
import sys
from typing import IO, Any, Dict, Iterator, List, Optional

from parse import parse

from .chunk import Chunk, StringChunk
from .container import ListChunk


def findall(pattern: str, root: Optional[ListChunk]) -> Iterator[Chunk]:
    """Yield children of root whose tag matches given parse pattern."""
    if root is None:
        return
    for c in root:
        if parse(pattern, c.id, evaluate_result=False):
            yield c


def find(pattern: str, root: Optional[ListChunk]) -> Optional[Chunk]:
    return next(findall(pattern, root), None)


def render(chunk: Optional[Chunk], level: int = 0, stream: IO[str] = sys.stdout) -> None:
    if chunk is None:
        return
    attribs: Dict[str, Any] = {'size': chunk.size}
    children: List[Chunk] = []
    if isinstance(chunk, ListChunk):
        attribs['type'] = chunk.type
        children = list(chunk)
    elif isinstance(chunk, StringChunk):
        attribs['value'] = chunk.data
    rendered = ''.join(f' {key}="{value}"' for key, value in attribs.items())
    indent = '    ' * level
    closing = '' if children else ' /'
    print(f'{indent}<{chunk.id}{rendered}{closing}>', file=stream)
    if children:
        for c in children:
            render(c, level=level + 1, stream=stream)
        print(f'{indent}</{chunk.id}>', file=stream)


def renders(chunk: Optional[Chunk]) -> str:
    with io.StringIO() as stream:
        render(chunk, stream=stream)
        return stream.getvalue()
