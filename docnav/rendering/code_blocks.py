"""Syntax-highlighted code blocks with per-line markup and line numbers.

The markup emitted here is consumed by downstream stylesheets, so the class
names (``code-block``, ``code-wrapper``, ``line-numbers``, ``line-number``,
``code-line``, ``code-language``, ``hljs`` and ``language-<name>``) must stay
stable. Pygments token spans carry the ``hljs-`` prefix.

Example
-------
>>> from docnav.rendering.code_blocks import CodeBlockRenderer
>>> html = CodeBlockRenderer().render("print('hi')\\n", "python")
>>> html.startswith('<pre class="code-block"><span class="code-language">python')
True
"""

from __future__ import annotations

import typing as typ
from html import escape

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markdown.util import AtomicString
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from docnav._constants import DIAGRAM_LANGUAGE

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
    from pygments.lexer import Lexer
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any
    Lexer = typ.Any

TOKEN_CLASS_PREFIX = "hljs-"
FENCE_CLASS = "code-block"


def _resolve_lexer(language: str) -> Lexer | None:
    """Return the Pygments lexer registered for ``language`` or None."""
    if not language:
        return None
    try:
        return get_lexer_by_name(language, stripnl=False)
    except ClassNotFound:
        return None


def _guess_lexer(code: str) -> Lexer:
    """Best-effort lexer detection, falling back to plain text."""
    try:
        return guess_lexer(code, stripnl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False)


def _code_unescape(text: str) -> str:
    """Reverse the escaping Python-Markdown applies to indented code."""
    return text.replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")


class CodeBlockRenderer:
    """Render source snippets into the line-numbered code block markup."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(
            style=pygments_style, classprefix=TOKEN_CLASS_PREFIX, nowrap=True
        )

    @property
    def stylesheet(self) -> str:
        """Return the CSS for the ``hljs-`` prefixed token classes."""
        return self._formatter.get_style_defs(".hljs")

    def render(self, code: str, info: str | None = None) -> str:
        """Render ``code`` as highlighted HTML.

        Parameters
        ----------
        code : str
            Raw (unescaped) source text of the block.
        info : str, optional
            Language tag from the fence. Unknown or missing tags trigger
            lexer detection; the diagram keyword bypasses highlighting.

        Returns
        -------
        str
            Complete HTML for the block.
        """
        language = (info or "").strip()
        if language == DIAGRAM_LANGUAGE:
            return f'<div class="mermaid">{escape(code.strip())}</div>'

        lexer = _resolve_lexer(language)
        valid_language = language if lexer is not None else ""
        if lexer is None:
            lexer = _guess_lexer(code)
        highlighted = highlight(code, lexer, self._formatter)

        lines = highlighted.split("\n")
        if lines[-1] == "":
            lines.pop()

        numbers = "".join(
            f'<span class="line-number">{index}</span>'
            for index in range(1, len(lines) + 1)
        )
        body = "\n".join(
            f'<span class="code-line">{line or " "}</span>' for line in lines
        )
        class_names = ["hljs"]
        label = ""
        if valid_language:
            language_name = escape(valid_language)
            class_names.append(f"language-{language_name}")
            label = f'<span class="code-language">{language_name}</span>'
        return (
            f'<pre class="code-block">{label}<div class="code-wrapper">'
            f'<div class="line-numbers">{numbers}</div>'
            f'<code class="{" ".join(class_names)}">{body}</code></div></pre>'
        )

    def format_fence(
        self,
        source: str,
        language: str,
        class_name: str,
        options: dict[str, typ.Any],
        md: Markdown,
        **kwargs: typ.Any,  # noqa: ANN401
    ) -> str:
        """Adapt :meth:`render` to the superfences formatter signature."""
        return self.render(source, language or None)


class CodeBlockExtension(Extension):
    """Route fenced and indented code through :class:`CodeBlockRenderer`.

    Fences are parsed by ``pymdownx.superfences`` so they nest inside
    blockquotes, call-outs and list items; a catch-all custom fence hands
    every block to the renderer. Indented blocks are picked out of the
    element tree after block parsing.
    """

    def __init__(self, renderer: CodeBlockRenderer) -> None:
        super().__init__()
        self.renderer = renderer

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register superfences with a catch-all formatter and the indented pass."""
        md.registerExtension(self)
        md.registerExtensions(
            ["pymdownx.superfences"],
            {
                "pymdownx.superfences": {
                    "custom_fences": [
                        {
                            "name": "*",
                            "class": FENCE_CLASS,
                            "format": self.renderer.format_fence,
                        }
                    ]
                }
            },
        )
        md.treeprocessors.register(
            IndentedCodeTreeprocessor(md, self.renderer), "docnav_indented_code", 30
        )


class IndentedCodeTreeprocessor(Treeprocessor):
    """Re-render indented code blocks produced by the core block parser."""

    def __init__(self, md: Markdown, renderer: CodeBlockRenderer) -> None:
        super().__init__(md)
        self.renderer = renderer

    def run(self, root: Element) -> None:
        """Swap each ``<pre><code>`` element for a stashed highlighted block."""
        targets: list[tuple[Element, int, Element]] = []
        for parent in root.iter():
            for index, child in enumerate(parent):
                if child.tag != "pre" or len(child) != 1:
                    continue
                code = child[0]
                if code.tag == "code" and not code.get("class"):
                    targets.append((parent, index, child))

        for parent, index, pre in targets:
            source = _code_unescape(pre[0].text or "")
            placeholder = self.md.htmlStash.store(self.renderer.render(source))
            replacement = parent.makeelement("p", {})
            replacement.text = AtomicString(placeholder)
            replacement.tail = pre.tail
            parent[index] = replacement


__all__ = [
    "CodeBlockExtension",
    "CodeBlockRenderer",
    "IndentedCodeTreeprocessor",
]
