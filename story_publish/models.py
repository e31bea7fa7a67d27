#!/usr/bin/env python3
"""
Story Model Module

In-memory records for the stories being published, plus loaders for the
Twine-style JSON that the command-line tools read.

Story JSON uses Twine's camelCase keys (storyFormat, tagColors, startPassage,
...); snake_case spellings are accepted too.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

# Twine's defaults for a freshly created passage
DEFAULT_PASSAGE_LEFT = 100
DEFAULT_PASSAGE_TOP = 100
DEFAULT_PASSAGE_WIDTH = 100
DEFAULT_PASSAGE_HEIGHT = 100

Number = Union[int, float]


def _pick(data: Dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    """Read a key that may be spelled in camelCase or snake_case."""
    if camel in data:
        return data[camel]
    return data.get(snake, default)


@dataclass
class AppInfo:
    """The application credited as creator of published stories."""
    name: str
    version: str


@dataclass
class Passage:
    """A single passage: its text, tags and position on the story map."""
    id: str
    name: str
    text: str = ''
    tags: List[str] = field(default_factory=list)
    left: Number = DEFAULT_PASSAGE_LEFT
    top: Number = DEFAULT_PASSAGE_TOP
    width: Number = DEFAULT_PASSAGE_WIDTH
    height: Number = DEFAULT_PASSAGE_HEIGHT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Passage':
        return cls(
            id=str(data['id']),
            name=data.get('name', ''),
            text=data.get('text', ''),
            tags=list(data.get('tags') or []),
            left=data.get('left', DEFAULT_PASSAGE_LEFT),
            top=data.get('top', DEFAULT_PASSAGE_TOP),
            width=data.get('width', DEFAULT_PASSAGE_WIDTH),
            height=data.get('height', DEFAULT_PASSAGE_HEIGHT),
        )


@dataclass
class Story:
    """A complete story: metadata, user stylesheet and script, and passages.

    ``passages`` keeps collection order; published local ids follow it.
    ``start_passage`` holds a passage ``id``, not a name.
    """
    name: str
    ifid: str = ''
    zoom: Number = 1
    story_format: str = ''
    story_format_version: str = ''
    stylesheet: str = ''
    script: str = ''
    tag_colors: Dict[str, str] = field(default_factory=dict)
    start_passage: Optional[str] = None
    passages: List[Passage] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Story':
        """Build a Story from Twine-style story JSON.

        Args:
            data: Dict with story fields and a ``passages`` list

        Returns:
            Story with its passages in the order they appear in ``data``
        """
        start = _pick(data, 'startPassage', 'start_passage')
        return cls(
            name=data.get('name', ''),
            ifid=data.get('ifid', ''),
            zoom=data.get('zoom', 1),
            story_format=_pick(data, 'storyFormat', 'story_format', ''),
            story_format_version=_pick(data, 'storyFormatVersion', 'story_format_version', ''),
            stylesheet=data.get('stylesheet') or '',
            script=data.get('script') or '',
            tag_colors=dict(_pick(data, 'tagColors', 'tag_colors') or {}),
            start_passage=str(start) if start else None,
            passages=[Passage.from_dict(p) for p in data.get('passages', [])],
        )


@dataclass
class StoryFormat:
    """A loaded story format. ``properties['source']`` holds its HTML template."""
    name: str = ''
    version: str = ''
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def source(self) -> Optional[str]:
        return (self.properties or {}).get('source')


def load_stories(path: Path) -> List[Story]:
    """Load stories from a JSON file.

    The file may hold a single story object or a list of story objects.

    Args:
        path: Path to the story JSON file

    Returns:
        List of stories, in file order

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = [data]

    stories = [Story.from_dict(item) for item in data]
    logger.debug(f"Loaded {len(stories)} stories from {path}")
    return stories
