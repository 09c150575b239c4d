"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

from dataclasses import dataclass
from typing import Union

# inline nodes


@dataclass(frozen=True)
class Text:
    "Plain text, which may contain the attachment embedding syntax `![[filename]]`."

    text: str


@dataclass(frozen=True)
class Strong:
    children: tuple["Inline", ...]


@dataclass(frozen=True)
class Emphasis:
    children: tuple["Inline", ...]


@dataclass(frozen=True)
class Strikethrough:
    children: tuple["Inline", ...]


@dataclass(frozen=True)
class InlineCode:
    text: str


@dataclass(frozen=True)
class Link:
    """
    A hyperlink.

    :param href: Link target.
    :param title: Link title (tooltip), if any.
    :param children: Display content.
    """

    href: str
    title: str | None
    children: tuple["Inline", ...]


@dataclass(frozen=True)
class Image:
    """
    An image reference.

    :param href: Image source, either a URL or a path to a local file (attachment).
    :param title: Image title, if any.
    :param alt: Alternate text, if any.
    """

    href: str
    title: str | None = None
    alt: str | None = None


@dataclass(frozen=True)
class LineBreak:
    "Hard line break within a paragraph."


@dataclass(frozen=True)
class InlineHtml:
    text: str


@dataclass(frozen=True)
class Checkbox:
    "A task list checkbox at the start of a list item."

    checked: bool


Inline = Union[Text, Strong, Emphasis, Strikethrough, InlineCode, Link, Image, LineBreak, InlineHtml, Checkbox]


def plain_text(inlines: tuple[Inline, ...]) -> str:
    "Extracts the text content of a sequence of inline nodes, discarding formatting."

    parts: list[str] = []
    for node in inlines:
        if isinstance(node, (Text, InlineCode, InlineHtml)):
            parts.append(node.text)
        elif isinstance(node, (Strong, Emphasis, Strikethrough, Link)):
            parts.append(plain_text(node.children))
        elif isinstance(node, Image):
            parts.append(node.alt or "")
        elif isinstance(node, LineBreak):
            parts.append("\n")
    return "".join(parts)


# block nodes


@dataclass(frozen=True)
class Paragraph:
    children: tuple[Inline, ...]


@dataclass(frozen=True)
class Heading:
    depth: int
    children: tuple[Inline, ...]


@dataclass(frozen=True)
class TextBlock:
    "A run of inline content not wrapped in a paragraph, e.g. the text of a tight list item."

    children: tuple[Inline, ...]


@dataclass(frozen=True)
class ListItem:
    """
    An item in an ordered or unordered list.

    :param children: Block content of the item.
    :param loose: True if the item content is separated by blank lines (wrapped in paragraphs).
    """

    children: tuple["Block", ...]
    loose: bool = False


@dataclass(frozen=True)
class List:
    ordered: bool
    items: tuple[ListItem, ...]


@dataclass(frozen=True)
class Cell:
    children: tuple[Inline, ...]
    header: bool = False

    @property
    def text(self) -> str:
        return plain_text(self.children)


@dataclass(frozen=True)
class Table:
    header: tuple[Cell, ...]
    rows: tuple[tuple[Cell, ...], ...]


@dataclass(frozen=True)
class Blockquote:
    children: tuple["Block", ...]


@dataclass(frozen=True)
class CodeBlock:
    """
    A fenced or indented code block.

    :param text: Code text without the trailing newline.
    :param language: Language identifier in the info string of a fenced code block.
    """

    text: str
    language: str | None = None


@dataclass(frozen=True)
class ThematicBreak:
    pass


@dataclass(frozen=True)
class HtmlBlock:
    text: str


Block = Union[Paragraph, Heading, TextBlock, List, Table, Blockquote, CodeBlock, ThematicBreak, HtmlBlock]


@dataclass(frozen=True)
class Document:
    children: tuple[Block, ...]
