"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

from abc import ABC, abstractmethod
from typing import Iterable

from .language import AtlassianLanguage, map_language
from .nodes import (
    Block,
    Blockquote,
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
from .options import RenderOptions, resolve_flag


class DocumentRenderer(ABC):
    """
    Base class for renderers that serialize a document tree into a target format.

    Each node type has a corresponding method that returns the string representation of the node. Container nodes
    call back into `render_blocks` and `render_inlines` to render their children.
    """

    options: RenderOptions

    def __init__(self, options: RenderOptions | None = None) -> None:
        self.options = options or RenderOptions()

    def render(self, document: Document) -> str:
        "Renders a complete document."

        return self.render_blocks(document.children)

    def render_blocks(self, blocks: Iterable[Block], loose: bool = False) -> str:
        """
        Renders a sequence of block nodes.

        :param blocks: Block nodes to render in document order.
        :param loose: True if bare text runs are to be rendered as paragraphs.
        """

        return "".join(self.render_block(block, loose) for block in blocks)

    def render_inlines(self, inlines: Iterable[Inline]) -> str:
        "Renders a sequence of inline nodes."

        return "".join(self.render_inline(inline) for inline in inlines)

    def render_block(self, block: Block, loose: bool = False) -> str:
        match block:
            case Paragraph():
                return self.paragraph(block)
            case Heading():
                return self.heading(block)
            case TextBlock():
                if loose:
                    return self.paragraph(Paragraph(block.children))
                return self.text_block(block)
            case List():
                return self.list_block(block)
            case Table():
                return self.table(block)
            case Blockquote():
                return self.blockquote(block)
            case CodeBlock():
                return self.code_block(block)
            case ThematicBreak():
                return self.thematic_break(block)
            case HtmlBlock():
                return self.html_block(block)
            case _:
                raise NotImplementedError(f"match not exhaustive for block node: {type(block).__name__}")

    def render_inline(self, inline: Inline) -> str:
        match inline:
            case Text():
                return self.text(inline)
            case Strong():
                return self.strong(inline)
            case Emphasis():
                return self.emphasis(inline)
            case Strikethrough():
                return self.strikethrough(inline)
            case InlineCode():
                return self.inline_code(inline)
            case Link():
                return self.link(inline)
            case Image():
                return self.image(inline)
            case LineBreak():
                return self.line_break(inline)
            case InlineHtml():
                return self.inline_html(inline)
            case Checkbox():
                return self.checkbox(inline)
            case _:
                raise NotImplementedError(f"match not exhaustive for inline node: {type(inline).__name__}")

    def render_list_item_text(self, item: ListItem) -> tuple[str | None, tuple[Block, ...]]:
        """
        Splits a list item into the inline rendering of its leading text and its remaining blocks.

        :returns: A tuple of rendered leading text (or `None` if the item does not start with text) and remaining blocks.
        """

        if item.children and isinstance(item.children[0], (TextBlock, Paragraph)):
            return self.render_inlines(item.children[0].children), item.children[1:]
        return None, item.children

    def code_block_parameters(self, block: CodeBlock) -> tuple[AtlassianLanguage, bool, bool]:
        "Resolves the language, and the line number and collapse flags of a code block."

        language = map_language(block.language)
        options = self.options.code_block
        show_line_numbers = resolve_flag(options.show_line_numbers, block.text, language)
        collapse = resolve_flag(options.collapse, block.text, language)
        return language, show_line_numbers, collapse

    @abstractmethod
    def paragraph(self, block: Paragraph) -> str: ...

    @abstractmethod
    def heading(self, block: Heading) -> str: ...

    @abstractmethod
    def text_block(self, block: TextBlock) -> str: ...

    @abstractmethod
    def list_block(self, block: List) -> str: ...

    @abstractmethod
    def list_item(self, item: ListItem) -> str: ...

    @abstractmethod
    def table(self, block: Table) -> str: ...

    @abstractmethod
    def blockquote(self, block: Blockquote) -> str: ...

    @abstractmethod
    def code_block(self, block: CodeBlock) -> str: ...

    @abstractmethod
    def thematic_break(self, block: ThematicBreak) -> str: ...

    @abstractmethod
    def html_block(self, block: HtmlBlock) -> str: ...

    @abstractmethod
    def text(self, inline: Text) -> str: ...

    @abstractmethod
    def strong(self, inline: Strong) -> str: ...

    @abstractmethod
    def emphasis(self, inline: Emphasis) -> str: ...

    @abstractmethod
    def strikethrough(self, inline: Strikethrough) -> str: ...

    @abstractmethod
    def inline_code(self, inline: InlineCode) -> str: ...

    @abstractmethod
    def link(self, inline: Link) -> str: ...

    @abstractmethod
    def image(self, inline: Image) -> str: ...

    @abstractmethod
    def line_break(self, inline: LineBreak) -> str: ...

    @abstractmethod
    def inline_html(self, inline: InlineHtml) -> str: ...

    @abstractmethod
    def checkbox(self, inline: Checkbox) -> str: ...
