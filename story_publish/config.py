"""
Environment configuration for the publishing tools.

Library functions take their collaborators as arguments; these values are
only the defaults used by the command-line tools and save_file.
"""

import os
from pathlib import Path

from story_publish import __version__
from story_publish.models import AppInfo

APP_NAME = os.getenv("STORY_PUBLISH_APP_NAME", "Twine")
APP_VERSION = os.getenv("STORY_PUBLISH_APP_VERSION", __version__)
OUTPUT_DIR = Path(os.getenv("STORY_PUBLISH_OUTPUT_DIR", "."))
LOCALE = os.getenv("STORY_PUBLISH_LOCALE", "en")


def default_app_info() -> AppInfo:
    """AppInfo credited as creator when none is given on the command line."""
    return AppInfo(name=APP_NAME, version=APP_VERSION)
