import glob
import os
from itertools import chain
from typing import Iterable, List, Optional, Set

import typer

from riffkit.kernel import tree
from riffkit.riff.webp import WebP, read_metadata
from riffkit.utils.fileio import read_file

app = typer.Typer()


def get_files(globs: Iterable[str]) -> Set[str]:
    return set(chain.from_iterable(glob.iglob(fname) for fname in globs))


@app.command('map')
def map_chunks(
    files: List[str] = typer.Argument(..., help='Files to read from'),
    tag: Optional[str] = typer.Option(None, '--tag', help='Only show matching chunks'),
) -> None:
    for filename in sorted(get_files(files)):
        basename = os.path.basename(filename)
        print(f'Mapping file: {basename}')
        root = WebP.from_path(filename)
        if tag is None:
            print(tree.renders(root), end='')
        else:
            for chunk in tree.findall(tag, root):
                print(tree.renders(chunk), end='')


@app.command('meta')
def show_metadata(
    files: List[str] = typer.Argument(..., help='Files to read from'),
) -> None:
    for filename in sorted(get_files(files)):
        basename = os.path.basename(filename)
        print(f'Metadata of file: {basename}')
        for key, value in read_metadata(WebP.from_path(filename)).items():
            print(f'{key}: {value}')


@app.command('set')
def set_metadata(
    filename: str = typer.Argument(..., help='File to update'),
    comment: Optional[str] = typer.Option(None, '--comment', help='ICMT text'),
    copyright_: Optional[str] = typer.Option(None, '--copyright', help='ICOP text'),
    artist: Optional[str] = typer.Option(None, '--artist', help='IART text'),
    title: Optional[str] = typer.Option(None, '--title', help='INAM text'),
    target: Optional[str] = typer.Option(
        None, '--target', '-t', help='Output file, defaults to input file'
    ),
) -> None:
    webp = WebP.from_path(filename)
    if comment is not None:
        webp.set_comment(comment)
    if copyright_ is not None:
        webp.set_copyright(copyright_)
    if artist is not None:
        webp.set_artist(artist)
    if title is not None:
        webp.set_title(title)
    output = target or filename
    print(f'Writing file: {os.path.basename(output)}')
    webp.dump_to_file(output)


@app.command('clear')
def clear_metadata(
    filename: str = typer.Argument(..., help='File to update'),
    target: Optional[str] = typer.Option(
        None, '--target', '-t', help='Output file, defaults to input file'
    ),
) -> None:
    webp = WebP.from_path(filename)
    webp.clear_metadata()
    output = target or filename
    print(f'Writing file: {os.path.basename(output)}')
    webp.dump_to_file(output)


@app.command('wrap')
def wrap_image(
    filename: str = typer.Argument(..., help='Raw VP8 bitstream'),
    target: str = typer.Option(..., '--target', '-t', help='Output WebP file'),
) -> None:
    webp = WebP.from_image_bytes(read_file(filename))
    print(f'Wrapping image: {os.path.basename(filename)}')
    webp.dump_to_file(target)


if __name__ == '__main__':
    app()
