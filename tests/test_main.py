"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import io
import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from md2clip.__main__ import main
from md2clip.clipboard import ClipboardError
from md2clip.settings import load_settings
from md2clip.options import CodeBlockTheme
from tests.utility import TypedTestCase

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
)

SOURCE = "---\ntitle: Example\n---\n# Title\n\nSome **bold** text\n"


class TestCommandLine(TypedTestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.mdpath = self.root / "example.md"
        with open(self.mdpath, "w", encoding="utf-8") as f:
            f.write(SOURCE)
        self.settings = self.root / "settings.yaml"

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def run_main(self, *args: str) -> str:
        argv = ["md2clip", *args, "--settings", str(self.settings)]
        with mock.patch("sys.argv", argv), mock.patch("sys.stdout", new_callable=io.StringIO) as stdout:
            main()
        return stdout.getvalue()

    def test_wiki_markup(self) -> None:
        output = self.run_main(str(self.mdpath), "--format", "wikimarkup", "--stdout")
        self.assertEqual(output, "h1. Title\n\nSome *bold* text\n")

    def test_storage_format(self) -> None:
        output = self.run_main(str(self.mdpath), "--stdout")
        self.assertEqual(output, "<h1>Title</h1><p>Some <strong>bold</strong> text</p>\n")

    def test_keep_frontmatter(self) -> None:
        output = self.run_main(str(self.mdpath), "--stdout", "--keep-frontmatter")
        self.assertStartsWith(output, "<hr />")

    def test_lines(self) -> None:
        output = self.run_main(str(self.mdpath), "--format", "wikimarkup", "--lines", "6:6", "--stdout")
        self.assertEqual(output, "Some *bold* text\n")

    def test_invalid_lines(self) -> None:
        with mock.patch("sys.stderr", new_callable=io.StringIO):
            with self.assertRaises(SystemExit) as context:
                self.run_main(str(self.mdpath), "--lines", "5:1", "--stdout")
        self.assertEqual(context.exception.code, 2)

    def test_stdin(self) -> None:
        with mock.patch("sys.stdin", io.StringIO("```sh\nls -la\n```\n")):
            output = self.run_main("-", "--format", "wikimarkup", "--line-numbers", "--stdout")
        self.assertEqual(output, "{code:collapse=false|language=bash|linenumbers=true|theme=Confluence}\nls -la\n{code}\n")

    def test_output_file(self) -> None:
        target = self.root / "output.xml"
        self.run_main(str(self.mdpath), "-o", str(target))
        with open(target, "r", encoding="utf-8") as f:
            self.assertEqual(f.read(), "<h1>Title</h1><p>Some <strong>bold</strong> text</p>")

    def test_clipboard(self) -> None:
        with mock.patch("md2clip.__main__.copy_to_clipboard") as copy:
            self.run_main(str(self.mdpath), "--format", "wikimarkup")
        copy.assert_called_once_with("h1. Title\n\nSome *bold* text")

    def test_clipboard_error(self) -> None:
        with mock.patch("md2clip.__main__.copy_to_clipboard", side_effect=ClipboardError("no clipboard utility found")):
            with self.assertRaises(SystemExit) as context:
                self.run_main(str(self.mdpath))
        self.assertEqual(context.exception.code, 1)

    def test_missing_file(self) -> None:
        with self.assertRaises(SystemExit) as context:
            self.run_main(str(self.root / "missing.md"), "--stdout")
        self.assertEqual(context.exception.code, 1)

    def test_save_settings(self) -> None:
        self.run_main(str(self.mdpath), "--format", "wikimarkup", "--theme", "Emacs", "--save-settings", "--stdout")
        settings = load_settings(self.settings)
        self.assertEqual(settings.theme, CodeBlockTheme.EMACS)

        # saved settings apply when no option is passed on the command line
        with mock.patch("sys.stdin", io.StringIO("```\nx\n```\n")):
            output = self.run_main("-", "--stdout")
        self.assertIn("theme=Emacs", output)


if __name__ == "__main__":
    unittest.main()
