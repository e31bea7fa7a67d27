"""
Story Publishing Library

This library serializes in-memory Twine stories into the HTML markup that
story formats and archive importers read back.

Modules:
- models: Story, Passage, AppInfo and StoryFormat records plus JSON loading
- publish_story: Serialize passages and stories into tw-storydata markup
- bind_format: Bind a published story into a story format's template
- publish_archive: Combine many stories into a single archive document
"""

__version__ = "1.0.0"
