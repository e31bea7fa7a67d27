#!/usr/bin/env python3
"""
Publish Story Module

Serializes a story into tw-storydata markup without binding it to a story
format. This is the "naked" published form that story formats embed and that
archives are made of.

Input: story JSON (one story object)
Output: HTML fragment (<tw-storydata> with <tw-passagedata> children)

Passages are numbered sequentially in published output (pid 1..N, in
passage collection order); the story's startnode refers to that number, not
to the passage id.

Usage:
    python3 -m story_publish.publish_story story.json story.html [--start ID]
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import Dict, Optional

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from story_publish.config import default_app_info
from story_publish.errors import NoStartPointError, PublishError, StartPointNotFoundError
from story_publish.models import AppInfo, Passage, Story, load_stories

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / 'templates'


def js_value(value):
    """Render a value the way the browser publisher printed it.

    None becomes an empty string and whole floats drop their fraction
    (100.0 -> 100), so geometry and zoom match JavaScript's output.
    """
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


# =============================================================================
# TEMPLATES
# =============================================================================

env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=True,
    finalize=js_value,
)


def publish_passage(passage: Passage, local_id: int) -> str:
    """Publish a passage to a tw-passagedata fragment.

    Args:
        passage: The passage to publish
        local_id: Sequential number of the passage within the published story

    Returns:
        HTML fragment with the name, tags, position, size and text escaped
    """
    template = env.get_template('passagedata.html.jinja2')
    return template.render(passage=passage, pid=local_id)


def build_local_ids(story: Story) -> Dict[str, int]:
    """Map passage ids to their published local ids (1-based, collection order).

    If two passages share an id, the later one wins.
    """
    local_ids = {}
    for local_id, passage in enumerate(story.passages, start=1):
        local_ids[passage.id] = local_id
    return local_ids


def publish_story(
    app_info: AppInfo,
    story: Story,
    format_options: Optional[str] = None,
    start_id: Optional[str] = None,
    start_optional: bool = False,
) -> str:
    """Publish a story to a tw-storydata fragment.

    Args:
        app_info: Application credited as the story's creator
        story: The story to publish
        format_options: Option string passed through to the story format
        start_id: Passage id to start at (default: the story's start passage)
        start_optional: If True, publish even without a valid start passage

    Returns:
        HTML fragment containing the stylesheet, script, tag colors and passages

    Raises:
        NoStartPointError: If no start passage is set and start_optional is False
        StartPointNotFoundError: If the start passage does not exist and
            start_optional is False
    """
    start_id = start_id or story.start_passage
    local_ids = build_local_ids(story)

    if not start_optional:
        if not start_id:
            raise NoStartPointError(story.name)

        if start_id not in local_ids:
            raise StartPointNotFoundError(start_id)

    passage_data = Markup('').join(
        Markup(publish_passage(passage, local_id))
        for local_id, passage in enumerate(story.passages, start=1)
    )

    template = env.get_template('storydata.html.jinja2')
    output = template.render(
        app_info=app_info,
        story=story,
        startnode=local_ids.get(start_id, ''),
        options=format_options,
        passage_data=passage_data,
    )

    logger.debug(f"Published story '{story.name}' with {len(story.passages)} passages")
    return output


# =============================================================================
# CLI INTERFACE
# =============================================================================

def main():
    """Main entry point for command-line usage."""
    parser = argparse.ArgumentParser(
        description='Publish a story JSON file to tw-storydata HTML'
    )
    parser.add_argument('input_json', type=Path, help='Path to story JSON file')
    parser.add_argument('output_html', type=Path, help='Path to output HTML file')
    parser.add_argument('--start', help='Passage id to start at (default: story start passage)')
    parser.add_argument('--options', default=None, help='Story format options string')
    parser.add_argument('--lenient', action='store_true',
                        help='Publish even if the start passage is missing')

    args = parser.parse_args()

    if not args.input_json.exists():
        print(f"Error: Input file not found: {args.input_json}", file=sys.stderr)
        sys.exit(1)

    stories = load_stories(args.input_json)
    if len(stories) != 1:
        print(f"Error: Expected one story, found {len(stories)}", file=sys.stderr)
        sys.exit(1)
    story = stories[0]

    try:
        html = publish_story(default_app_info(), story, args.options, args.start, args.lenient)
    except PublishError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    args.output_html.parent.mkdir(parents=True, exist_ok=True)
    with open(args.output_html, 'w', encoding='utf-8') as f:
        f.write(html)

    print(f"✓ Published {len(story.passages)} passages", file=sys.stderr)
    print(f"✓ Output: {args.output_html}", file=sys.stderr)


if __name__ == '__main__':
    main()
