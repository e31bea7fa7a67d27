#!/usr/bin/env python3
"""
Tests for the command-line entry points of the publishing modules.
"""

import sys
import json
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from story_publish import bind_format, publish_archive, publish_story


STORY = {
    'name': 'CLI Story',
    'ifid': 'IFID-CLI',
    'storyFormat': 'Harlowe',
    'storyFormatVersion': '3.3.9',
    'startPassage': 'b',
    'passages': [
        {'id': 'a', 'name': 'First', 'text': 'One'},
        {'id': 'b', 'name': 'Second', 'text': 'Two'},
    ],
}


def write_json(path, data):
    path.write_text(json.dumps(data), encoding='utf-8')
    return path


def run_main(monkeypatch, main, *args):
    monkeypatch.setattr(sys, 'argv', ['prog', *[str(a) for a in args]])
    main()


def test_publish_story_cli(tmp_path, monkeypatch, capsys):
    """Test publishing a story file to HTML."""
    story_json = write_json(tmp_path / 'story.json', STORY)
    output = tmp_path / 'out' / 'story.html'

    run_main(monkeypatch, publish_story.main, story_json, output, '--options', 'debug')

    html = output.read_text(encoding='utf-8')
    assert html.startswith('<tw-storydata name="CLI Story" startnode="2"')
    assert 'options="debug"' in html
    assert '✓ Published 2 passages' in capsys.readouterr().err


def test_publish_story_cli_reports_missing_start(tmp_path, monkeypatch, capsys):
    """Test that a story without a start passage exits with an error."""
    story_json = write_json(tmp_path / 'story.json', dict(STORY, startPassage=None))

    with pytest.raises(SystemExit) as exc_info:
        run_main(monkeypatch, publish_story.main, story_json, tmp_path / 'story.html')

    assert exc_info.value.code == 1
    assert 'no starting point' in capsys.readouterr().err


def test_publish_story_cli_lenient(tmp_path, monkeypatch):
    """Test that --lenient publishes without a start passage."""
    story_json = write_json(tmp_path / 'story.json', dict(STORY, startPassage=None))
    output = tmp_path / 'story.html'

    run_main(monkeypatch, publish_story.main, story_json, output, '--lenient')

    assert 'startnode=""' in output.read_text(encoding='utf-8')


def test_publish_story_cli_missing_input(tmp_path, monkeypatch, capsys):
    """Test that a missing input file exits with an error."""
    with pytest.raises(SystemExit) as exc_info:
        run_main(monkeypatch, publish_story.main, tmp_path / 'nope.json', tmp_path / 'out.html')

    assert exc_info.value.code == 1
    assert 'Input file not found' in capsys.readouterr().err


def test_bind_format_cli(tmp_path, monkeypatch, capsys):
    """Test publishing a story with a format file."""
    story_json = write_json(tmp_path / 'story.json', STORY)
    format_js = tmp_path / 'format.js'
    format_js.write_text(
        'window.storyFormat({"name": "Harlowe", "version": "3.3.9", '
        '"source": "<title>{{STORY_NAME}}</title>{{STORY_DATA}}"});',
        encoding='utf-8',
    )
    output = tmp_path / 'play.html'

    run_main(monkeypatch, bind_format.main, story_json, format_js, output, '--start', 'a')

    html = output.read_text(encoding='utf-8')
    assert html.startswith('<title>CLI Story</title><tw-storydata')
    assert 'startnode="1"' in html
    assert '✓ Story format: Harlowe 3.3.9' in capsys.readouterr().err


def test_bind_format_cli_without_source(tmp_path, monkeypatch, capsys):
    """Test that a format without source exits with an error."""
    story_json = write_json(tmp_path / 'story.json', STORY)
    format_js = tmp_path / 'format.js'
    format_js.write_text('window.storyFormat({"name": "Broken"});', encoding='utf-8')

    with pytest.raises(SystemExit) as exc_info:
        run_main(monkeypatch, bind_format.main, story_json, format_js, tmp_path / 'play.html')

    assert exc_info.value.code == 1
    assert 'no source property' in capsys.readouterr().err


def test_publish_archive_cli(tmp_path, monkeypatch, capsys):
    """Test archiving a list of stories into the output directory."""
    stories_json = write_json(tmp_path / 'stories.json', [STORY, dict(STORY, name='Other', startPassage=None)])
    output_dir = tmp_path / 'archives'

    run_main(monkeypatch, publish_archive.main, stories_json,
             '--output-dir', output_dir, '--locale', 'de')

    files = list(output_dir.iterdir())
    assert len(files) == 1
    assert files[0].name.endswith(' Twine-Archiv.html')

    html = files[0].read_text(encoding='utf-8')
    assert html.count('<tw-storydata') == 2
    assert html.endswith('</tw-storydata>\n\n')
    assert '✓ Archived 2 stories' in capsys.readouterr().err


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
