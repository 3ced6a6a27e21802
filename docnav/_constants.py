"""Common literal values used across docnav.

These constants keep metadata keys, class names, and tuning values
centralized so the renderer, loader, and tests import the same values without
drifting. Intended for internal use within the docnav package.

Examples
--------
>>> from docnav import _constants
>>> _constants.WORDS_PER_MINUTE
300
>>> _constants.DIAGRAM_LANGUAGE
'mermaid'
"""

WORDS_PER_MINUTE = 300
DIAGRAM_LANGUAGE = "mermaid"
MARKDOWN_SUFFIX = ".md"
DEFAULT_SOURCE_PATTERN = "**/*.md"
TITLE_KEY = "title"
LAST_UPDATED_KEYS = ("lastUpdated", "last_updated")
