"""
Errors raised while publishing stories.

All of them derive from PublishError so command-line tools can report any
publishing failure the same way.
"""


class PublishError(ValueError):
    """Base class for story publishing failures."""


class MissingTemplateSourceError(PublishError):
    """The story format has no template source to bind into."""

    def __init__(self, format_name: str = ''):
        self.format_name = format_name
        super().__init__('Story format has no source property.')


class NoStartPointError(PublishError):
    """No starting passage was given or set on the story."""

    def __init__(self, story_name: str = ''):
        self.story_name = story_name
        super().__init__('There is no starting point set for this story.')


class StartPointNotFoundError(PublishError):
    """The starting passage id does not match any passage in the story."""

    def __init__(self, start_id: str):
        self.start_id = start_id
        super().__init__(
            'The passage set as starting point for this story does not exist.'
        )


class StoryFormatLoadError(PublishError):
    """A story format file could not be decoded."""
