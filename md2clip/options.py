"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import enum
from dataclasses import dataclass, field
from typing import Callable

from .language import AtlassianLanguage


@enum.unique
class CodeBlockTheme(enum.Enum):
    "Color theme of the code macro in Confluence wiki markup."

    DJANGO = "DJango"
    EMACS = "Emacs"
    FADE_TO_GREY = "FadeToGrey"
    MIDNIGHT = "Midnight"
    RDARK = "RDark"
    ECLIPSE = "Eclipse"
    CONFLUENCE = "Confluence"


@enum.unique
class WikiTableLayout(enum.Enum):
    """
    Arrangement of table cells in Confluence wiki markup.

    * `COLUMNS`: Each column of the source table becomes a line that starts with the column header.
    * `ROWS`: Each row of the source table becomes a line, with a header line on top.
    """

    COLUMNS = "columns"
    ROWS = "rows"


CodeBlockPredicate = Callable[[str, AtlassianLanguage], bool]
"Decides a code block flag based on the code text and the resolved language."

CodeBlockFlag = bool | CodeBlockPredicate


def resolve_flag(flag: CodeBlockFlag, code: str, language: AtlassianLanguage) -> bool:
    "Evaluates a code block flag that is either a constant or a predicate."

    if isinstance(flag, bool):
        return flag
    return bool(flag(code, language))


@dataclass(frozen=True)
class CodeBlockOptions:
    """
    Options for rendering fenced code blocks.

    :param theme: Color theme of the code macro (wiki markup only).
    :param show_line_numbers: Whether to display line numbers, or a function of code text and language.
    :param collapse: Whether to collapse the code block, or a function of code text and language.
    """

    theme: CodeBlockTheme = CodeBlockTheme.CONFLUENCE
    show_line_numbers: CodeBlockFlag = False
    collapse: CodeBlockFlag = False


@dataclass(frozen=True)
class ImageOptions:
    """
    Options for rendering images.

    :param default_width: Display width for images [px]. `None` (or 0) keeps the original size.
    """

    default_width: int | None = None

    def __post_init__(self) -> None:
        if self.default_width is not None and self.default_width < 0:
            raise ValueError(f"expected: non-negative image width; got: {self.default_width}")

    @property
    def width(self) -> int | None:
        "Display width to apply, or `None` if images keep their original size."

        return self.default_width or None


@dataclass(frozen=True)
class RenderOptions:
    """
    Options that control how a document is rendered.

    An instance is created for each conversion, and renderers never modify it.

    :param code_block: Options for fenced code blocks.
    :param image: Options for images.
    :param replace_newlines_in_paragraphs: Whether to join lines in a paragraph (wiki markup only).
        `False` keeps line breaks, `True` replaces them with a space, and a string replaces them with that string.
    :param table_layout: Arrangement of table cells (wiki markup only).
    """

    code_block: CodeBlockOptions = field(default_factory=CodeBlockOptions)
    image: ImageOptions = field(default_factory=ImageOptions)
    replace_newlines_in_paragraphs: bool | str = False
    table_layout: WikiTableLayout = WikiTableLayout.COLUMNS
