"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

from .escape import escape_html
from .extra import override
from .language import AtlassianLanguage
from .nodes import (
    Blockquote,
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
from .renderer import DocumentRenderer
from .wiki import EMBED_PATTERN


def _attachment_image(filename: str) -> str:
    return f'<ac:image><ri:attachment ri:filename="{escape_html(filename)}" /></ac:image>'


def _is_task(item: ListItem) -> bool:
    "True if the list item starts with a checkbox."

    if not item.children:
        return False
    first = item.children[0]
    return isinstance(first, (TextBlock, Paragraph)) and bool(first.children) and isinstance(first.children[0], Checkbox)


class StorageFormatRenderer(DocumentRenderer):
    """
    Renders a document tree as Confluence Storage Format (XHTML).

    The output can be pasted directly into the Confluence editor.
    """

    @override
    def paragraph(self, block: Paragraph) -> str:
        return f"<p>{self.render_inlines(block.children)}</p>"

    @override
    def heading(self, block: Heading) -> str:
        return f"<h{block.depth}>{self.render_inlines(block.children)}</h{block.depth}>"

    @override
    def text_block(self, block: TextBlock) -> str:
        return self.render_inlines(block.children)

    @override
    def list_block(self, block: List) -> str:
        tag = "ol" if block.ordered else "ul"
        body = "".join(self.list_item(item) for item in block.items)
        return f"<{tag}>{body}</{tag}>"

    @override
    def list_item(self, item: ListItem) -> str:
        text, blocks = self.render_list_item_text(item)
        content = text or ""
        if blocks:
            content += self.render_blocks(blocks, item.loose)
        if _is_task(item):
            # close the elements opened by the checkbox
            content += "</ac:task-body></ac:task>"
        return f"<li>{content}</li>"

    @override
    def table(self, block: Table) -> str:
        parts = ["<table><tbody>"]
        if block.header:
            parts.append("<tr>")
            for cell in block.header:
                parts.append(f"<th>{self.render_inlines(cell.children)}</th>")
            parts.append("</tr>")
        for row in block.rows:
            parts.append("<tr>")
            for cell in row:
                content = self.render_inlines(cell.children)
                parts.append(f"<td>{content or '&nbsp;'}</td>")
            parts.append("</tr>")
        parts.append("</tbody></table>")
        return "".join(parts)

    @override
    def blockquote(self, block: Blockquote) -> str:
        return f"<blockquote>{self.render_blocks(block.children)}</blockquote>"

    @override
    def code_block(self, block: CodeBlock) -> str:
        language, show_line_numbers, collapse = self.code_block_parameters(block)

        params: list[str] = []
        if language is not AtlassianLanguage.NONE:
            params.append(f'<ac:parameter ac:name="language">{language.value}</ac:parameter>')
        if show_line_numbers:
            params.append('<ac:parameter ac:name="linenumbers">true</ac:parameter>')
        if collapse:
            params.append('<ac:parameter ac:name="collapse">true</ac:parameter>')

        return (
            '<ac:structured-macro ac:name="code">'
            + "".join(params)
            + f"<ac:plain-text-body><![CDATA[{escape_html(block.text)}]]></ac:plain-text-body>"
            + "</ac:structured-macro>"
        )

    @override
    def thematic_break(self, block: ThematicBreak) -> str:
        return "<hr />"

    @override
    def html_block(self, block: HtmlBlock) -> str:
        return block.text

    @override
    def text(self, inline: Text) -> str:
        # odd positions hold the file names captured by the embedding syntax
        parts = EMBED_PATTERN.split(inline.text)
        return "".join(_attachment_image(part) if index % 2 else escape_html(part) for index, part in enumerate(parts))

    @override
    def strong(self, inline: Strong) -> str:
        return f"<strong>{self.render_inlines(inline.children)}</strong>"

    @override
    def emphasis(self, inline: Emphasis) -> str:
        return f"<em>{self.render_inlines(inline.children)}</em>"

    @override
    def strikethrough(self, inline: Strikethrough) -> str:
        return f"<s>{self.render_inlines(inline.children)}</s>"

    @override
    def inline_code(self, inline: InlineCode) -> str:
        return f"<code>{escape_html(inline.text)}</code>"

    @override
    def link(self, inline: Link) -> str:
        title = f' title="{escape_html(inline.title)}"' if inline.title else ""
        return f'<a href="{escape_html(inline.href)}"{title}>{self.render_inlines(inline.children)}</a>'

    @override
    def image(self, inline: Image) -> str:
        attributes = ""
        if inline.alt:
            attributes += f' alt="{escape_html(inline.alt)}"'
        if inline.title:
            attributes += f' title="{escape_html(inline.title)}"'
        if (width := self.options.image.width) is not None:
            attributes += f' ac:width="{width}"'

        href = escape_html(inline.href)
        if inline.href.startswith(("http://", "https://")):
            resource = f'<ri:url ri:value="{href}" />'
        else:
            resource = f'<ri:attachment ri:filename="{href}" />'
        return f"<ac:image{attributes}>{resource}</ac:image>"

    @override
    def line_break(self, inline: LineBreak) -> str:
        return "<br />"

    @override
    def inline_html(self, inline: InlineHtml) -> str:
        return inline.text

    @override
    def checkbox(self, inline: Checkbox) -> str:
        status = "complete" if inline.checked else "incomplete"
        return f"<ac:task><ac:task-status>{status}</ac:task-status><ac:task-body>"
