"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
import unittest

from md2clip.frontmatter import extract_frontmatter
from md2clip.selection import LineSpan, parse_line_span, select_lines
from md2clip.settings import ArgumentError
from tests.utility import TypedTestCase

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
)

DOCUMENT = "line 1\nline 2\nline 3\nline 4\n"


class TestSelection(TypedTestCase):
    def test_parse(self) -> None:
        self.assertEqual(parse_line_span("2:3"), LineSpan(2, 3))
        self.assertEqual(parse_line_span("2:"), LineSpan(2, None))
        self.assertEqual(parse_line_span(":3"), LineSpan(1, 3))
        self.assertEqual(parse_line_span("4"), LineSpan(4, 4))
        self.assertEqual(str(LineSpan(2, None)), "2:")

    def test_parse_invalid(self) -> None:
        for text in ["", ":", "a:b", "1-3", "3:2", "0:1"]:
            with self.subTest(text=text):
                with self.assertRaises(ArgumentError):
                    parse_line_span(text)

    def test_select(self) -> None:
        self.assertEqual(select_lines(DOCUMENT, LineSpan(2, 3)), "line 2\nline 3\n")
        self.assertEqual(select_lines(DOCUMENT, LineSpan(3)), "line 3\nline 4\n")
        self.assertEqual(select_lines(DOCUMENT, LineSpan(4, 10)), "line 4\n")
        self.assertEqual(select_lines(DOCUMENT, LineSpan(8, 9)), "")


class TestFrontMatter(TypedTestCase):
    def test_extract(self) -> None:
        data, text = extract_frontmatter("---\ntitle: Notes\ntags: [a, b]\n---\n# Heading\n")
        self.assertEqual(data, {"title": "Notes", "tags": ["a", "b"]})
        self.assertEqual(text, "# Heading\n")

    def test_no_frontmatter(self) -> None:
        self.assertEqual(extract_frontmatter("# Heading\n"), (None, "# Heading\n"))

    def test_not_a_mapping(self) -> None:
        text = "---\nJust a paragraph between rules.\n---\nMore text\n"
        self.assertEqual(extract_frontmatter(text), (None, text))


if __name__ == "__main__":
    unittest.main()
