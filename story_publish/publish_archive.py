#!/usr/bin/env python3
"""
Publish Archive Module

Publishes many stories into a single archive document: each story's
tw-storydata fragment followed by a blank line, with no wrapper element and
no story format binding.

Input: stories JSON (a list of story objects, or one story)
Output: "<timestamp> Twine Archive.html" in the output directory

Usage:
    python3 -m story_publish.publish_archive stories.json --output-dir dist/
"""

import re
import sys
import argparse
import logging
from datetime import datetime
from functools import partial
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from story_publish import config
from story_publish.i18n import translate as default_translate
from story_publish.models import AppInfo, Story, load_stories
from story_publish.publish_story import publish_story

logger = logging.getLogger(__name__)

UNSAFE_FILENAME_CHARS = re.compile(r'[/:\\]')

SaveFunction = Callable[[bytes, str], Any]
TranslateFunction = Callable[[str], str]


def publish_archive(stories: Iterable[Story], app_info: AppInfo) -> str:
    """Publish an archive of stories.

    Stories are published even without a valid start passage; their
    startnode is left empty.

    Args:
        stories: Stories to publish, in archive order
        app_info: Application credited as creator

    Returns:
        Each story's fragment followed by a blank line ('' for no stories)
    """
    output = ''
    for story in stories:
        output += publish_story(app_info, story, None, None, True) + '\n\n'
    return output


def archive_filename(now: datetime, translate: TranslateFunction = default_translate) -> str:
    """Build the standard archive filename for a moment in time.

    The timestamp uses the locale's date and time representation, with
    characters that are unsafe in paths replaced by '.'.
    """
    timestamp = UNSAFE_FILENAME_CHARS.sub('.', now.strftime('%x %X'))
    return f"{timestamp} {translate('store.archiveFilename')}"


def save_file(data: bytes, suggested_name: str, output_dir: Optional[Path] = None) -> Path:
    """Save bytes under the output directory.

    Args:
        data: File contents
        suggested_name: File name to save as
        output_dir: Target directory (default: STORY_PUBLISH_OUTPUT_DIR)

    Returns:
        Path of the written file
    """
    output_dir = Path(output_dir) if output_dir is not None else config.OUTPUT_DIR
    output_dir.mkdir(parents=True, exist_ok=True)

    path = output_dir / suggested_name
    path.write_bytes(data)

    logger.info(f"Saved {len(data)} bytes to {path}")
    return path


def publish_archive_to_file(
    stories: Iterable[Story],
    app_info: AppInfo,
    save: SaveFunction = save_file,
    translate: TranslateFunction = default_translate,
    now: Optional[datetime] = None,
) -> Any:
    """Publish an archive of stories and hand it to ``save`` with a standard name.

    Args:
        stories: Stories to publish, in archive order
        app_info: Application credited as creator
        save: Called once as save(data, filename); data is UTF-8 HTML
        translate: Message lookup for the localized base name
        now: Timestamp for the filename (default: current local time)

    Returns:
        Whatever ``save`` returns (the written Path for save_file)
    """
    if now is None:
        now = datetime.now()

    data = publish_archive(stories, app_info).encode('utf-8')
    filename = archive_filename(now, translate)

    logger.debug(f"Archive '{filename}' is {len(data)} bytes")
    return save(data, filename)


# =============================================================================
# CLI INTERFACE
# =============================================================================

def main():
    """Main entry point for command-line usage."""
    parser = argparse.ArgumentParser(
        description='Publish a JSON file of stories to a Twine archive'
    )
    parser.add_argument('input_json', type=Path, help='Path to stories JSON file')
    parser.add_argument('--output-dir', type=Path, default=config.OUTPUT_DIR,
                        help='Directory to write the archive to (default: STORY_PUBLISH_OUTPUT_DIR or .)')
    parser.add_argument('--locale', default=None,
                        help='Locale for the archive file name (default: STORY_PUBLISH_LOCALE or en)')

    args = parser.parse_args()

    if not args.input_json.exists():
        print(f"Error: Input file not found: {args.input_json}", file=sys.stderr)
        sys.exit(1)

    stories = load_stories(args.input_json)

    try:
        path = publish_archive_to_file(
            stories,
            config.default_app_info(),
            save=partial(save_file, output_dir=args.output_dir),
            translate=partial(default_translate, locale=args.locale),
        )
    except OSError as e:
        print(f"Error: Could not save archive: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"✓ Archived {len(stories)} stories", file=sys.stderr)
    print(f"✓ Output: {path}", file=sys.stderr)


if __name__ == '__main__':
    main()
