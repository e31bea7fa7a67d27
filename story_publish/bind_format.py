#!/usr/bin/env python3
"""
Bind Format Module

Publishes a story with a story format: the format's HTML template gets the
story name and the published tw-storydata fragment substituted in.

Input: story JSON + story format (format.js)
Output: playable HTML document

Usage:
    python3 -m story_publish.bind_format story.json format.js story.html
"""

import re
import sys
import json
import argparse
import logging
from pathlib import Path
from typing import Optional

from markupsafe import escape

from story_publish.config import default_app_info
from story_publish.errors import MissingTemplateSourceError, PublishError, StoryFormatLoadError
from story_publish.models import AppInfo, Story, StoryFormat, load_stories
from story_publish.publish_story import publish_story

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r'\{\{(STORY_NAME|STORY_DATA)\}\}')

# format.js files wrap their properties in a JSONP call
FORMAT_JSONP_PATTERN = re.compile(r'^\s*window\.storyFormat\s*\((.*)\)\s*;?\s*$', re.DOTALL)


def publish_story_with_format(
    app_info: AppInfo,
    story: Story,
    story_format: StoryFormat,
    format_options: Optional[str] = None,
    start_id: Optional[str] = None,
) -> str:
    """Publish a story bound into a story format's template.

    The format must already be loaded. Placeholders are replaced through a
    callback, so substitution patterns like $1 or \\1 inside the story are
    copied as-is and inserted text is never searched for placeholders.

    Args:
        app_info: Application credited as the story's creator
        story: The story to publish
        story_format: Loaded story format with properties['source']
        format_options: Option string passed through to the story format
        start_id: Passage id to start at (default: the story's start passage)

    Returns:
        The format's source with {{STORY_NAME}} and {{STORY_DATA}} filled in

    Raises:
        MissingTemplateSourceError: If the format has no source property
        NoStartPointError: If the story has no start passage
        StartPointNotFoundError: If the start passage does not exist
    """
    source = story_format.source
    if not source:
        raise MissingTemplateSourceError(story_format.name)

    story_data = None

    def substitute(match: re.Match) -> str:
        nonlocal story_data

        if match.group(1) == 'STORY_NAME':
            return str(escape(story.name))

        if story_data is None:
            story_data = publish_story(app_info, story, format_options, start_id)
        return story_data

    output = PLACEHOLDER_PATTERN.sub(substitute, source)

    logger.info(f"Bound story '{story.name}' into {story_format.name} {story_format.version}")
    return output


def load_story_format(path: Path) -> StoryFormat:
    """Load a story format from a format.js file.

    Accepts the window.storyFormat({...}) wrapper used by published formats
    or a bare JSON object.

    Args:
        path: Path to format.js

    Returns:
        StoryFormat whose properties are the decoded object

    Raises:
        FileNotFoundError: If the file does not exist
        StoryFormatLoadError: If the file does not hold a format object
    """
    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()

    match = FORMAT_JSONP_PATTERN.match(content)
    payload = match.group(1) if match else content

    try:
        properties = json.loads(payload)
    except json.JSONDecodeError as e:
        raise StoryFormatLoadError(f"Could not decode story format {path}: {e}") from e

    if not isinstance(properties, dict):
        raise StoryFormatLoadError(f"Story format {path} is not an object")

    return StoryFormat(
        name=properties.get('name', ''),
        version=properties.get('version', ''),
        properties=properties,
    )


# =============================================================================
# CLI INTERFACE
# =============================================================================

def main():
    """Main entry point for command-line usage."""
    parser = argparse.ArgumentParser(
        description='Publish a story JSON file with a story format'
    )
    parser.add_argument('input_json', type=Path, help='Path to story JSON file')
    parser.add_argument('format_js', type=Path, help='Path to story format (format.js)')
    parser.add_argument('output_html', type=Path, help='Path to output HTML file')
    parser.add_argument('--start', help='Passage id to start at (default: story start passage)')
    parser.add_argument('--options', default=None, help='Story format options string')

    args = parser.parse_args()

    for path in (args.input_json, args.format_js):
        if not path.exists():
            print(f"Error: Input file not found: {path}", file=sys.stderr)
            sys.exit(1)

    stories = load_stories(args.input_json)
    if len(stories) != 1:
        print(f"Error: Expected one story, found {len(stories)}", file=sys.stderr)
        sys.exit(1)
    story = stories[0]

    try:
        story_format = load_story_format(args.format_js)
        html = publish_story_with_format(
            default_app_info(), story, story_format, args.options, args.start
        )
    except PublishError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    args.output_html.parent.mkdir(parents=True, exist_ok=True)
    with open(args.output_html, 'w', encoding='utf-8') as f:
        f.write(html)

    print(f"✓ Story format: {story_format.name} {story_format.version}", file=sys.stderr)
    print(f"✓ Output: {args.output_html}", file=sys.stderr)


if __name__ == '__main__':
    main()
