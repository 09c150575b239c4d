"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import re
from dataclasses import dataclass

import markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

from .extra import override

# list item such as `- item`, `* item`, `+ item`, `1. item` or `1) item`
_LIST_ITEM = re.compile(r"^(?P<indent>[ ]*)(?P<marker>[*+-]|\d+[.)])(?P<space>[ ]+|$)")

# opening or closing line of a fenced code block
_FENCE = re.compile(r"^[ ]*(?P<fence>`{3,}|~{3,})")

# indentation Python-Markdown expects for each nesting level of a list
_TAB_LENGTH = 4


@dataclass
class _ListLevel:
    "Columns of an open list item in the source text."

    indent: int
    content: int


def _leading_spaces(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _shift(line: str, offset: int) -> str:
    "Indents a line by the given number of spaces (or outdents if negative)."

    if offset >= 0:
        return " " * offset + line
    return line[min(-offset, _leading_spaces(line)) :]


class ListIndentPreprocessor(Preprocessor):
    """
    Normalizes the indentation of nested lists.

    Python-Markdown requires four spaces of indentation for each level of nesting, whereas Markdown is commonly written
    with two (or three) spaces per level. Lines in a list are re-indented such that each level of nesting is indented
    by exactly four spaces, which lets the parser produce a nested list structure. Continuation paragraphs and fenced
    code blocks within list items move along with the item they belong to.
    """

    @override
    def run(self, lines: list[str]) -> list[str]:
        result: list[str] = []
        stack: list[_ListLevel] = []
        fence: str | None = None
        fence_offset = 0
        after_blank = False
        # previous line continues an item in a block of its own, i.e. after a blank line
        detached = False

        for line in lines:
            if fence is not None:
                result.append(_shift(line, fence_offset))
                m = _FENCE.match(line)
                if m is not None and m.group("fence").startswith(fence) and not line.strip().strip(fence[0]):
                    fence = None
                continue

            if not line.strip():
                after_blank = True
                result.append(line)
                continue

            indent = _leading_spaces(line)
            item = _LIST_ITEM.match(line)

            # a line without indentation after a blank line terminates the list
            if stack and indent == 0 and after_blank and item is None:
                stack.clear()

            offset = 0
            if item is not None and (indent < _TAB_LENGTH or stack):
                # a list may interrupt a paragraph without a separating blank line
                if not stack and result and not after_blank:
                    result.append("")
                # a sibling item must not be absorbed into a preceding continuation paragraph
                elif stack and detached and not after_blank:
                    result.append("")
                detached = False

                while stack and indent <= stack[-1].indent:
                    stack.pop()
                level = len(stack)
                content = indent + len(item.group("marker")) + len(item.group("space"))
                stack.append(_ListLevel(indent, content))
                offset = _TAB_LENGTH * level - indent
            elif stack:
                depth = len(stack)
                while depth > 0 and indent <= stack[depth - 1].indent:
                    depth -= 1
                if depth > 0:
                    # continuation line of an item; keep indentation in excess of the item content column
                    excess = max(0, indent - stack[depth - 1].content)
                    offset = _TAB_LENGTH * depth + excess - indent
                detached = detached or after_blank

                if (m := _FENCE.match(line)) is not None:
                    fence = m.group("fence")
                    fence_offset = offset
            elif (m := _FENCE.match(line)) is not None:
                fence = m.group("fence")
                fence_offset = 0

            if not stack:
                detached = False

            result.append(_shift(line, offset))
            after_blank = False

        return result


class ListIndentExtension(Extension):
    "Registers the list indentation preprocessor with Python-Markdown."

    @override
    def extendMarkdown(self, md: markdown.Markdown) -> None:
        # after whitespace normalization (30) but before fenced code (25) and raw HTML (20)
        md.preprocessors.register(ListIndentPreprocessor(md), "list_indent", 28)


_CONVERTER = markdown.Markdown(
    extensions=[
        "markdown.extensions.tables",
        "pymdownx.highlight",  # required by `pymdownx.superfences`
        "pymdownx.superfences",
        "pymdownx.tilde",
        "sane_lists",
        ListIndentExtension(),
    ],
    extension_configs={
        "pymdownx.highlight": {
            "use_pygments": False,
        },
        "pymdownx.tilde": {
            "subscript": False,
        },
    },
)


def markdown_to_html(content: str) -> str:
    """
    Converts a Markdown document into XHTML with Python-Markdown.

    :param content: Markdown input as a string.
    :returns: XHTML output as a string.
    :see: https://python-markdown.github.io/
    """

    _CONVERTER.reset()
    html = _CONVERTER.convert(content)
    return html
