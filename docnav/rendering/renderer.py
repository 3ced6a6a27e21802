"""Render document Markdown into embeddable HTML fragments."""

from __future__ import annotations

import re
import typing as typ

from markdown import Markdown

from .callouts import DEFAULT_LOCALE, CalloutExtension
from .code_blocks import CodeBlockExtension, CodeBlockRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

PREFIX_CHARS = " \t>"
FENCE_LINE_PATTERN = re.compile(
    r"^(?P<prefix>[ \t>]*)(?P<fence>`{3,}|~{3,})(?P<info>.*)$"
)
FENCE_LANGUAGE_PATTERN = re.compile(r"[\w#.+-]+")
MARGIN_INDENT_PATTERN = re.compile(r"[ ]{1,3}")
BASE_EXTENSIONS: tuple[str, ...] = (
    "footnotes",
    "def_list",
    "tables",
    "sane_lists",
    "smarty",
    "pymdownx.tasklist",
    "pymdownx.arithmatex",
    "pymdownx.magiclink",
)


class HtmlContentRenderer:
    """Render Markdown with call-outs and line-numbered code blocks."""

    def __init__(
        self,
        pygments_style: str = "monokai",
        *,
        callout_locale: str | None = DEFAULT_LOCALE,
        extra_extensions: cabc.Sequence[Extension | str] = (),
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Pygments style used for the exported token stylesheet. Defaults
            to ``"monokai"``.
        callout_locale : str, optional
            Locale key selecting call-out titles. Defaults to English.
        extra_extensions : Sequence[Extension | str], optional
            Additional Markdown extensions appended after the built-in set.
        """
        self.pygments_style = pygments_style
        self.callout_locale = callout_locale
        self._code_renderer = CodeBlockRenderer(pygments_style)
        self._extra_extensions = list(extra_extensions)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._code_renderer.stylesheet

    def markdown(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = [
            *BASE_EXTENSIONS,
            CodeBlockExtension(self._code_renderer),
            CalloutExtension(self.callout_locale),
            *self._extra_extensions,
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "pymdownx.tasklist": {
                    "custom_checkbox": True,
                    "clickable_checkbox": False,
                },
                "pymdownx.arithmatex": {"generic": True},
            },
        )
        return md.convert(normalized)

    def code_block(self, code: str, language: str | None = None) -> str:
        """Render ``code`` as a standalone highlighted block."""
        return self._code_renderer.render(code, language)

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        """Reduce fence info strings to a bare language and isolate each fence.

        Fences indented by one to three spaces are pulled back to the margin
        along with their content. Closing fences longer than their opener are
        shortened to match it, and blank lines keep an opener or closer from
        joining an adjacent paragraph.
        """
        output: list[str] = []
        opener: str | None = None
        dedent = 0
        closed_prefix: str | None = None
        for line in text.split("\n"):
            match = FENCE_LINE_PATTERN.match(line)
            if closed_prefix is not None:
                if line.strip(PREFIX_CHARS):
                    output.append(closed_prefix.rstrip())
                closed_prefix = None
            if opener is None:
                if match is None or (
                    match["fence"][0] == "`" and "`" in match["info"]
                ):
                    output.append(line)
                    continue
                prefix = match["prefix"]
                dedent = 0
                if MARGIN_INDENT_PATTERN.fullmatch(prefix):
                    dedent = len(prefix)
                prefix = prefix[dedent:]
                if output and output[-1].strip(PREFIX_CHARS):
                    output.append(prefix.rstrip())
                opener = match["fence"]
                language = _fence_language(match["info"])
                output.append(f"{prefix}{opener}{language}")
                continue
            line = line[:dedent].lstrip(" ") + line[dedent:]
            match = FENCE_LINE_PATTERN.match(line)
            if (
                match is not None
                and not match["info"].strip()
                and match["fence"][0] == opener[0]
                and len(match["fence"]) >= len(opener)
            ):
                output.append(f"{match['prefix']}{opener}")
                closed_prefix = match["prefix"]
                opener = None
                continue
            output.append(line)
        return "\n".join(output)


def _fence_language(info: str) -> str:
    """Return the language token of a fence info string, or an empty string."""
    words = info.split()
    if not words:
        return ""
    language = words[0].split(",", 1)[0]
    return language if FENCE_LANGUAGE_PATTERN.fullmatch(language) else ""


__all__ = ["BASE_EXTENSIONS", "HtmlContentRenderer"]
