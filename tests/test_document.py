"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
import unittest

from md2clip.document import html_to_document, parse_markdown
from md2clip.markdown import ListIndentPreprocessor
from md2clip.nodes import (
    Blockquote,
    Cell,
    Checkbox,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HtmlBlock,
    Image,
    LineBreak,
    Link,
    List,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    Text,
    TextBlock,
    ThematicBreak,
)
from tests.utility import TypedTestCase

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
)


class TestListIndent(TypedTestCase):
    def normalize(self, lines: list[str]) -> list[str]:
        return ListIndentPreprocessor().run(lines)

    def test_two_space_nesting(self) -> None:
        self.assertListEqual(self.normalize(["- a", "  - b", "    - c"]), ["- a", "    - b", "        - c"])

    def test_three_space_nesting(self) -> None:
        self.assertListEqual(self.normalize(["1. a", "   1. b"]), ["1. a", "    1. b"])

    def test_four_space_nesting(self) -> None:
        self.assertListEqual(self.normalize(["- a", "    - b"]), ["- a", "    - b"])

    def test_siblings(self) -> None:
        self.assertListEqual(self.normalize(["- a", "  - b", "- c"]), ["- a", "    - b", "- c"])

    def test_continuation_paragraph(self) -> None:
        self.assertListEqual(self.normalize(["- a", "", "  more", "- b"]), ["- a", "", "    more", "", "- b"])
        self.assertListEqual(self.normalize(["- a", "  more", "- b"]), ["- a", "    more", "- b"])
        self.assertListEqual(
            self.normalize(["* a", "", "  first", "  second", "* b"]),
            ["* a", "", "    first", "    second", "", "* b"],
        )

    def test_fenced_code_in_item(self) -> None:
        self.assertListEqual(
            self.normalize(["- a", "", "  ```js", "  x = 1", "  ```"]),
            ["- a", "", "    ```js", "    x = 1", "    ```"],
        )

    def test_top_level_fence(self) -> None:
        lines = ["```", "- a", "  - b", "```"]
        self.assertListEqual(self.normalize(lines), lines)

    def test_indented_code(self) -> None:
        lines = ["    - not a list item"]
        self.assertListEqual(self.normalize(lines), lines)

    def test_list_after_paragraph(self) -> None:
        self.assertListEqual(self.normalize(["Text", "- a"]), ["Text", "", "- a"])

    def test_list_terminated(self) -> None:
        self.assertListEqual(
            self.normalize(["- a", "", "Para", "  - b"]),
            ["- a", "", "Para", "", "- b"],
        )


class TestDocument(TypedTestCase):
    def test_empty(self) -> None:
        self.assertEqual(parse_markdown(""), Document(()))
        self.assertEqual(parse_markdown("\n\n"), Document(()))

    def test_heading(self) -> None:
        self.assertEqual(parse_markdown("## Title"), Document((Heading(2, (Text("Title"),)),)))

    def test_formatting(self) -> None:
        document = parse_markdown("Some **bold**, _italic_ and ~~deleted~~ text")
        self.assertEqual(
            document,
            Document(
                (
                    Paragraph(
                        (
                            Text("Some "),
                            Strong((Text("bold"),)),
                            Text(", "),
                            Emphasis((Text("italic"),)),
                            Text(" and "),
                            Strikethrough((Text("deleted"),)),
                            Text(" text"),
                        )
                    ),
                )
            ),
        )

    def test_hard_line_break(self) -> None:
        self.assertEqual(parse_markdown("a  \nb"), Document((Paragraph((Text("a"), LineBreak(), Text("b"))),)))

    def test_link_and_image(self) -> None:
        document = parse_markdown('[text](https://example.com "Tooltip") ![Alt](image.png "Title")')
        paragraph = document.children[0]
        assert isinstance(paragraph, Paragraph)
        self.assertEqual(paragraph.children[0], Link("https://example.com", "Tooltip", (Text("text"),)))
        self.assertEqual(paragraph.children[-1], Image("image.png", "Title", "Alt"))

    def test_nested_list(self) -> None:
        document = parse_markdown("- a\n  - b\n    - c\n- d")
        outer = document.children[0]
        assert isinstance(outer, List)
        self.assertFalse(outer.ordered)
        self.assertEqual(len(outer.items), 2)

        first = outer.items[0]
        self.assertEqual(first.children[0], TextBlock((Text("a"),)))
        inner = first.children[1]
        assert isinstance(inner, List)
        self.assertEqual(inner.items[0].children[0], TextBlock((Text("b"),)))
        innermost = inner.items[0].children[1]
        assert isinstance(innermost, List)
        self.assertEqual(innermost.items[0].children, (TextBlock((Text("c"),)),))

        self.assertEqual(outer.items[1].children, (TextBlock((Text("d"),)),))

    def test_ordered_list(self) -> None:
        document = parse_markdown("1. one\n2. two")
        block = document.children[0]
        assert isinstance(block, List)
        self.assertTrue(block.ordered)
        self.assertEqual(len(block.items), 2)

    def test_loose_list(self) -> None:
        document = parse_markdown("- a\n\n- b")
        block = document.children[0]
        assert isinstance(block, List)
        self.assertTrue(all(item.loose for item in block.items))
        self.assertEqual(block.items[0].children, (Paragraph((Text("a"),)),))

    def test_task_list(self) -> None:
        document = parse_markdown("- [ ] todo\n- [x] done")
        block = document.children[0]
        assert isinstance(block, List)
        self.assertEqual(block.items[0].children, (TextBlock((Checkbox(False), Text("todo"))),))
        self.assertEqual(block.items[1].children, (TextBlock((Checkbox(True), Text("done"))),))

    def test_code_block(self) -> None:
        self.assertEqual(parse_markdown("```python\nprint(1)\n```"), Document((CodeBlock("print(1)", "python"),)))
        self.assertEqual(parse_markdown("```\n{x} < 1\n```"), Document((CodeBlock("{x} < 1", None),)))

    def test_table(self) -> None:
        document = parse_markdown("| A | B |\n|---|---|\n| 1 | 2 |\n| 3 |   |")
        table = document.children[0]
        assert isinstance(table, Table)
        self.assertEqual(table.header, (Cell((Text("A"),), header=True), Cell((Text("B"),), header=True)))
        self.assertEqual(len(table.rows), 2)
        self.assertEqual(table.rows[0], (Cell((Text("1"),)), Cell((Text("2"),))))
        self.assertEqual(table.rows[1][1].text, "")

    def test_blockquote(self) -> None:
        self.assertEqual(parse_markdown("> quoted"), Document((Blockquote((Paragraph((Text("quoted"),)),)),)))

    def test_thematic_break(self) -> None:
        document = parse_markdown("a\n\n---\n\nb")
        self.assertEqual(document.children[1], ThematicBreak())

    def test_html(self) -> None:
        document = html_to_document("<p>x</p><!-- comment --><div>raw</div>")
        self.assertEqual(document.children[0], Paragraph((Text("x"),)))
        self.assertEqual(document.children[1], HtmlBlock("<!-- comment -->"))
        self.assertEqual(document.children[2], HtmlBlock("<div>raw</div>"))

    def test_entities(self) -> None:
        self.assertEqual(parse_markdown("AT&T <3"), Document((Paragraph((Text("AT&T <3"),)),)))


if __name__ == "__main__":
    unittest.main()
