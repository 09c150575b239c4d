"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
import re

from .escape import unescape_html
from .extra import override
from .nodes import (
    Blockquote,
    Cell,
    Checkbox,
    CodeBlock,
    Emphasis,
    Heading,
    HtmlBlock,
    Image,
    InlineCode,
    InlineHtml,
    LineBreak,
    Link,
    List,
    ListItem,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    Text,
    TextBlock,
    ThematicBreak,
)
from .options import WikiTableLayout
from .renderer import DocumentRenderer

LOGGER = logging.getLogger(__name__)

BULLET_MARKER = "*"
NUMBERED_MARKER = "#"

HEADER_CELL = "||"
BODY_CELL = "|"

# attachment embedding syntax `![[filename]]`
EMBED_PATTERN = re.compile(r"!\[\[(.*?)\]\]")

# list item already rendered as wiki markup by a nested list
_WIKI_LIST_ITEM = re.compile(r"^[#*]")

# line break in raw HTML, e.g. `<br>` or `<br/>`
_HTML_LINE_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)

# list item left as Markdown source text, e.g. `- item` or `1. item`
_MARKDOWN_LIST_ITEM = re.compile(r"^(?:[*+-]|\d+\.)\s")


class MalformedRowError(ValueError):
    "Raised when the text of a table row has no cell separator."


def reconstruct_nesting(lines: list[str], marker: str) -> list[str]:
    """
    Prefixes each line of a list with wiki list markers that reflect its nesting level.

    Lines produced by a nested list already start with a wiki list marker, and receive one more marker for the
    enclosing list. Lines that still carry a Markdown list marker get their nesting level from indentation (two
    spaces per level), and their Markdown marker is replaced. Any other line is an item of the current list.

    :param lines: Lines of the rendered list items.
    :param marker: `*` for bulleted lists or `#` for numbered lists.
    :returns: Lines with wiki list markers, excluding blank lines.
    """

    result: list[str] = []
    for line in lines:
        if not line.strip():
            continue

        leading_spaces = len(line) - len(line.lstrip())
        trimmed = line.strip()
        if _WIKI_LIST_ITEM.match(trimmed):
            result.append(f"{marker}{trimmed}")
        elif _MARKDOWN_LIST_ITEM.match(trimmed):
            level = leading_spaces // 2
            content = _MARKDOWN_LIST_ITEM.sub("", trimmed, count=1)
            result.append(f"{marker * (level + 1)} {content}")
        else:
            result.append(f"{marker} {trimmed}")
    return result


def close_table_row(text: str) -> str:
    """
    Appends the closing cell separator to the text of a table row.

    A row whose last cell is a header cell (i.e. the last single pipe immediately follows the last double pipe) is
    closed with `||`, any other row with `|`. Escaped pipes (`\\|`) are not cell separators.

    :param text: Concatenated cells of a table row.
    :returns: Table row terminated with a cell separator and a newline.
    :raises MalformedRowError: The row has no cell separator.
    """

    unescaped = text.replace("\\|", "")
    single = unescaped.rfind(BODY_CELL)
    if single < 0:
        raise MalformedRowError("the table row expects at least one '|' in the table cell")

    double = unescaped.rfind(HEADER_CELL)
    if double >= 0 and single - double == 1:
        close = HEADER_CELL
    else:
        close = BODY_CELL
    return f"{text}{close}\n"


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class WikiMarkupRenderer(DocumentRenderer):
    "Renders a document tree as Confluence wiki markup."

    @override
    def paragraph(self, block: Paragraph) -> str:
        text = self.render_inlines(block.children)
        replacement = self.options.replace_newlines_in_paragraphs
        if replacement:
            if replacement is True:
                replacement = " "
            text = text.replace("\r\n", "\n").replace("\n", replacement).strip()
        return f"{unescape_html(text)}\n\n"

    @override
    def heading(self, block: Heading) -> str:
        return f"h{block.depth}. {self.render_inlines(block.children)}\n\n"

    @override
    def text_block(self, block: TextBlock) -> str:
        return f"{self.render_inlines(block.children)}\n"

    @override
    def list_block(self, block: List) -> str:
        marker = NUMBERED_MARKER if block.ordered else BULLET_MARKER
        body = "".join(self.list_item(item) for item in block.items)
        lines = reconstruct_nesting(body.split("\n"), marker)
        return "\n".join(lines) + "\n\n"

    @override
    def list_item(self, item: ListItem) -> str:
        text, blocks = self.render_list_item_text(item)
        body = f"{text}\n" if text is not None else ""
        if blocks:
            body += self.render_blocks(blocks, item.loose)
        return f"{body}\n"

    @override
    def table(self, block: Table) -> str:
        match self.options.table_layout:
            case WikiTableLayout.COLUMNS:
                return self._table_by_columns(block)
            case WikiTableLayout.ROWS:
                return self._table_by_rows(block)
            case _:
                raise NotImplementedError("match not exhaustive for enumeration")

    def _cell_content(self, cell: Cell | None) -> str:
        if cell is None:
            return " "
        return self.render_inlines(cell.children) or " "

    def _table_by_columns(self, block: Table) -> str:
        "Renders each column as a line that starts with the column header."

        # without a header row, there is no column header to start a line with
        if not block.header:
            return self._table_by_rows(block)

        lines: list[str] = []
        for index, header in enumerate(block.header):
            line = f"{HEADER_CELL}{self._cell_content(header)}{BODY_CELL}"
            for row in block.rows:
                cell = row[index] if index < len(row) else None
                line += f"{self._cell_content(cell)}{BODY_CELL}"
            lines.append(line)
        return "\n".join(lines) + "\n"

    def _table_by_rows(self, block: Table) -> str:
        "Renders each row as a line, driven cell by cell."

        rows = [block.header] if block.header else []
        rows.extend(block.rows)
        return "".join(self.table_row(row) for row in rows)

    def table_row(self, cells: tuple[Cell, ...]) -> str:
        return close_table_row("".join(self.table_cell(cell) for cell in cells))

    def table_cell(self, cell: Cell) -> str:
        marker = HEADER_CELL if cell.header else BODY_CELL
        content = " " if cell.text == "" else self.render_inlines(cell.children)
        return f"{marker}{content}"

    @override
    def blockquote(self, block: Blockquote) -> str:
        return f"{{quote}}{self.render_blocks(block.children).strip()}{{quote}}\n\n"

    @override
    def code_block(self, block: CodeBlock) -> str:
        language, show_line_numbers, collapse = self.code_block_parameters(block)
        params = {
            "language": language.value,
            "theme": self.options.code_block.theme.value,
            "linenumbers": show_line_numbers,
            "collapse": collapse,
        }

        # sort parameters by key for deterministic output
        params_string = "|".join(f"{key}={_format_value(value)}" for key, value in sorted(params.items()))
        return f"{{code:{params_string}}}\n{block.text}\n{{code}}\n\n"

    @override
    def thematic_break(self, block: ThematicBreak) -> str:
        return "----\n"

    @override
    def html_block(self, block: HtmlBlock) -> str:
        text = _HTML_LINE_BREAK.sub("\n", block.text)
        return f"{text}\n\n"

    @override
    def text(self, inline: Text) -> str:
        return EMBED_PATTERN.sub(r"!\1!", inline.text)

    @override
    def strong(self, inline: Strong) -> str:
        return f"*{self.render_inlines(inline.children)}*"

    @override
    def emphasis(self, inline: Emphasis) -> str:
        return f"_{self.render_inlines(inline.children)}_"

    @override
    def strikethrough(self, inline: Strikethrough) -> str:
        return f"-{self.render_inlines(inline.children)}-"

    @override
    def inline_code(self, inline: InlineCode) -> str:
        # braces would be interpreted as the start or end of a macro
        text = inline.text.replace("{", "\\{").replace("}", "\\}")
        return f"{{{{{text}}}}}"

    @override
    def link(self, inline: Link) -> str:
        alias = self.render_inlines(inline.children) or inline.title
        if alias:
            return f"[{alias}|{inline.href}]"
        else:
            return f"[{inline.href}]"

    @override
    def image(self, inline: Image) -> str:
        params = {
            "alt": inline.alt,
            "title": inline.title,
            "width": self.options.image.width,
        }
        items = sorted((key, str(value)) for key, value in params.items() if value is not None and str(value).strip())
        params_string = ",".join(f"{key}={value}" for key, value in items)
        if params_string:
            return f"!{inline.href}|{params_string}!"
        else:
            return f"!{inline.href}!"

    @override
    def line_break(self, inline: LineBreak) -> str:
        return "\n"

    @override
    def inline_html(self, inline: InlineHtml) -> str:
        return inline.text.replace("<br>", "\n")

    @override
    def checkbox(self, inline: Checkbox) -> str:
        LOGGER.debug("Dropping checkbox: not supported in wiki markup")
        return ""
