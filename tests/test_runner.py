from typer.testing import CliRunner

from riffkit.riff.webp import WebP, webp_read_metadata
from riffkit.runner import app

IMAGE = b'\x9d\x01\x2a' + bytes(5)

runner = CliRunner()


def make_image(path, **metadata):
    webp = WebP.from_image_bytes(IMAGE)
    if 'title' in metadata:
        webp.set_title(metadata['title'])
    if 'comment' in metadata:
        webp.set_comment(metadata['comment'])
    webp.dump_to_file(str(path))
    return str(path)


def test_map(tmp_path):
    path = make_image(tmp_path / 'a.webp', title='Hi')
    result = runner.invoke(app, ['webp', 'map', path])
    assert result.exit_code == 0, result.output
    assert 'Mapping file: a.webp' in result.output
    assert '<RIFF size="31" type="WEBP">' in result.output
    assert '<INAM size="3" value="Hi" />' in result.output


def test_map_tag_pattern(tmp_path):
    path = make_image(tmp_path / 'a.webp', title='Hi', comment='note')
    result = runner.invoke(app, ['webp', 'map', path, '--tag', 'I{}'])
    assert result.exit_code == 0, result.output
    assert 'INAM' in result.output
    assert 'ICMT' in result.output
    assert 'VP8' not in result.output


def test_meta(tmp_path):
    path = make_image(tmp_path / 'a.webp', title='Hi')
    result = runner.invoke(app, ['webp', 'meta', path])
    assert result.exit_code == 0, result.output
    assert 'INAM: Hi' in result.output


def test_set(tmp_path):
    path = make_image(tmp_path / 'a.webp', title='old')
    result = runner.invoke(
        app, ['webp', 'set', path, '--title', 'new', '--artist', 'me', '--copyright', 'c']
    )
    assert result.exit_code == 0, result.output
    assert webp_read_metadata(path) == {'INAM': 'new', 'IART': 'me', 'ICOP': 'c'}


def test_set_to_target(tmp_path):
    path = make_image(tmp_path / 'a.webp')
    target = str(tmp_path / 'b.webp')
    result = runner.invoke(app, ['webp', 'set', path, '--comment', 'note', '-t', target])
    assert result.exit_code == 0, result.output
    assert webp_read_metadata(path) == {}
    assert webp_read_metadata(target) == {'ICMT': 'note'}


def test_clear(tmp_path):
    path = make_image(tmp_path / 'a.webp', title='Hi', comment='note')
    result = runner.invoke(app, ['webp', 'clear', path])
    assert result.exit_code == 0, result.output
    assert webp_read_metadata(path) == {}


def test_wrap(tmp_path):
    source = tmp_path / 'frame.vp8'
    source.write_bytes(IMAGE)
    target = str(tmp_path / 'frame.webp')
    result = runner.invoke(app, ['webp', 'wrap', str(source), '--target', target])
    assert result.exit_code == 0, result.output
    assert WebP.from_path(target).get_vp8_image() == IMAGE


def test_invalid_file(tmp_path):
    path = tmp_path / 'bad.webp'
    path.write_bytes(b'RIFX' + bytes(16))
    result = runner.invoke(app, ['webp', 'meta', str(path)])
    assert result.exit_code != 0
