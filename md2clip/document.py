"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
import re
from typing import Callable

import lxml.etree as ET
import lxml.html

from .markdown import markdown_to_html
from .nodes import (
    Block,
    Blockquote,
    Cell,
    Checkbox,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HtmlBlock,
    Image,
    Inline,
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

LOGGER = logging.getLogger(__name__)

ElementType = ET._Element

# HTML elements that start a new block when found in a container
_BLOCK_TAGS = frozenset(
    [
        "address",
        "article",
        "aside",
        "blockquote",
        "details",
        "dl",
        "div",
        "fieldset",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hr",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "table",
        "ul",
    ]
)

_TASK_MARKER = re.compile(r"^\[([ xX])\](?:\s+|$)")


class DocumentError(RuntimeError):
    "Raised when the HTML output of the Markdown parser has an unexpected structure."


def _is_comment(elem: ElementType) -> bool:
    return isinstance(elem, (ET._Comment, ET._ProcessingInstruction))


def _to_html(elem: ElementType) -> str:
    "Serializes an element as XHTML, such that void elements are self-closing (e.g. `<br/>`)."

    return ET.tostring(elem, method="xml", encoding="unicode", with_tail=False)


def _tail(elem: ElementType) -> str:
    "Text following an element, without the source line break that follows a hard line break."

    tail = elem.tail or ""
    if elem.tag == "br" and tail.startswith("\n"):
        tail = tail[1:]
    return tail


def _trim(inlines: list[Inline]) -> tuple[Inline, ...]:
    "Removes leading and trailing whitespace from a run of inline nodes."

    items = list(inlines)
    if items and isinstance(items[0], Text):
        items[0] = Text(items[0].text.lstrip())
    if items and isinstance(items[-1], Text):
        items[-1] = Text(items[-1].text.rstrip())
    return tuple(item for item in items if not (isinstance(item, Text) and not item.text))


def _with_checkbox(block: Block) -> Block:
    "Turns a leading `[ ]` or `[x]` marker of a list item into a checkbox."

    if not isinstance(block, (TextBlock, Paragraph)) or not block.children:
        return block

    first = block.children[0]
    if not isinstance(first, Text):
        return block

    m = _TASK_MARKER.match(first.text)
    if m is None:
        return block

    checkbox = Checkbox(checked=not m.group(1).isspace())
    rest = first.text[m.end() :]
    children: tuple[Inline, ...] = (checkbox, Text(rest)) if rest else (checkbox,)
    children += block.children[1:]
    if isinstance(block, TextBlock):
        return TextBlock(children)
    else:
        return Paragraph(children)


class DocumentBuilder:
    """
    Builds a document tree from the HTML produced by the Markdown parser.
    """

    def build(self, root: ElementType) -> Document:
        return Document(self._blocks(root, Paragraph))

    def _blocks(self, elem: ElementType, wrap: Callable[[tuple[Inline, ...]], Block]) -> tuple[Block, ...]:
        """
        Transforms the content of a container element into a sequence of blocks.

        Inline content found between block elements is collected into a single block with the help of `wrap`.
        """

        blocks: list[Block] = []
        run: list[Inline] = []

        def _flush() -> None:
            inlines = _trim(run)
            if inlines:
                blocks.append(wrap(inlines))
            run.clear()

        if elem.text:
            run.append(Text(elem.text))
        for child in elem:
            if _is_comment(child) or child.tag in _BLOCK_TAGS:
                _flush()
                blocks.append(self._block(child))
            else:
                run.append(self._inline(child))
            if tail := _tail(child):
                run.append(Text(tail))
        _flush()

        return tuple(blocks)

    def _block(self, elem: ElementType) -> Block:
        if _is_comment(elem):
            return HtmlBlock(_to_html(elem))

        match elem.tag:
            case "p":
                return Paragraph(self._content(elem))
            case "h1" | "h2" | "h3" | "h4" | "h5" | "h6":
                return Heading(int(elem.tag[1]), self._content(elem))
            case "ul" | "ol":
                return self._list(elem)
            case "blockquote":
                return Blockquote(self._blocks(elem, Paragraph))
            case "pre":
                return self._code_block(elem)
            case "hr":
                return ThematicBreak()
            case "table":
                return self._table(elem)
            case "div" if len(elem) == 1 and elem[0].tag == "pre" and not (elem.text or "").strip():
                # <div class="highlight"><pre><code> ... </code></pre></div>
                return self._code_block(elem[0])
            case _:
                LOGGER.debug("Passing through HTML block: <%s>", elem.tag)
                return HtmlBlock(_to_html(elem))

    def _list(self, elem: ElementType) -> List:
        items: list[ListItem] = []
        for child in elem:
            if _is_comment(child):
                continue
            if child.tag != "li":
                raise DocumentError(f"expected: `<li>` as the HTML element for a list item; got: `<{child.tag}>`")
            items.append(self._list_item(child))
        return List(ordered=elem.tag == "ol", items=tuple(items))

    def _list_item(self, elem: ElementType) -> ListItem:
        loose = any(child.tag == "p" for child in elem)
        children = self._blocks(elem, TextBlock)
        if children:
            children = (_with_checkbox(children[0]),) + children[1:]
        return ListItem(children, loose=loose)

    def _code_block(self, elem: ElementType) -> CodeBlock:
        "Transforms a code block such as `<pre><code class=\"language-java\"> ... </code></pre>`."

        language: str | None = None
        if len(elem) == 1 and elem[0].tag == "code":
            code = elem[0]
            if language_class := code.get("class"):
                if m := re.search(r"(?:^|\s)language-(\S+)", language_class):
                    language = m.group(1)
        else:
            code = elem

        return CodeBlock("".join(code.itertext()).rstrip("\n"), language)

    def _table(self, elem: ElementType) -> Table:
        rows: list[tuple[Cell, ...]] = []
        for tr in elem.iter("tr"):
            cells = tuple(Cell(self._content(td), header=td.tag == "th") for td in tr if td.tag in ("th", "td"))
            rows.append(cells)

        if rows and rows[0] and all(cell.header for cell in rows[0]):
            return Table(header=rows[0], rows=tuple(rows[1:]))
        else:
            return Table(header=(), rows=tuple(rows))

    def _content(self, elem: ElementType) -> tuple[Inline, ...]:
        "Transforms the content of a block-level element into a sequence of inline nodes."

        return _trim(self._inlines(elem))

    def _inlines(self, elem: ElementType) -> list[Inline]:
        "Transforms the content of an element into a sequence of inline nodes."

        items: list[Inline] = []
        if elem.text:
            items.append(Text(elem.text))
        for child in elem:
            items.append(self._inline(child))
            if tail := _tail(child):
                items.append(Text(tail))
        return items

    def _inline(self, elem: ElementType) -> Inline:
        if _is_comment(elem):
            return InlineHtml(_to_html(elem))

        match elem.tag:
            case "strong" | "b":
                return Strong(tuple(self._inlines(elem)))
            case "em" | "i":
                return Emphasis(tuple(self._inlines(elem)))
            case "del" | "s" | "strike":
                return Strikethrough(tuple(self._inlines(elem)))
            case "code":
                return InlineCode("".join(elem.itertext()))
            case "a":
                return Link(elem.get("href", ""), elem.get("title"), tuple(self._inlines(elem)))
            case "img":
                return Image(elem.get("src", ""), elem.get("title"), elem.get("alt"))
            case "br":
                return LineBreak()
            case "input" if elem.get("type") == "checkbox":
                return Checkbox(checked=elem.get("checked") is not None)
            case _:
                LOGGER.debug("Passing through inline HTML: <%s>", elem.tag)
                return InlineHtml(_to_html(elem))


def html_to_document(html: str) -> Document:
    """
    Builds a document tree from an HTML fragment.

    :param html: HTML produced by the Markdown parser.
    :returns: Document tree of block and inline nodes.
    """

    if not html.strip():
        return Document(())

    root = lxml.html.fragment_fromstring(html, create_parent="div")
    return DocumentBuilder().build(root)


def parse_markdown(text: str) -> Document:
    """
    Parses Markdown text into a document tree.

    :param text: Markdown input as a string.
    :returns: Document tree of block and inline nodes.
    """

    return html_to_document(markdown_to_html(text))
