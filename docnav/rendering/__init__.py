"""Markdown rendering with call-outs and line-numbered code blocks."""

from .callouts import CalloutExtension
from .code_blocks import CodeBlockExtension, CodeBlockRenderer
from .renderer import HtmlContentRenderer

__all__ = [
    "CalloutExtension",
    "CodeBlockExtension",
    "CodeBlockRenderer",
    "HtmlContentRenderer",
]
