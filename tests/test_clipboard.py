"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
import subprocess
import unittest
from unittest import mock

from md2clip.clipboard import ClipboardCommand, ClipboardError, copy_to_clipboard, execute_subprocess, find_clipboard_command
from tests.utility import TypedTestCase

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
)


def _process(returncode: int, stderr: bytes = b"") -> mock.MagicMock:
    proc = mock.MagicMock()
    proc.communicate.return_value = (b"", stderr)
    proc.returncode = returncode
    return proc


class TestClipboard(TypedTestCase):
    def test_find_macos(self) -> None:
        with mock.patch("sys.platform", "darwin"), mock.patch("shutil.which", return_value="/usr/bin/pbcopy"):
            self.assertEqual(find_clipboard_command(), ClipboardCommand(("pbcopy",)))

    def test_find_windows(self) -> None:
        with mock.patch("sys.platform", "win32"), mock.patch("shutil.which", return_value="C:\\Windows\\System32\\clip.exe"):
            self.assertEqual(find_clipboard_command(), ClipboardCommand(("clip",), encoding="utf-16"))

    def test_find_linux(self) -> None:
        def which(name: str) -> str | None:
            return "/usr/bin/xsel" if name == "xsel" else None

        with mock.patch("sys.platform", "linux"), mock.patch.dict("os.environ", {"WAYLAND_DISPLAY": ""}), mock.patch("shutil.which", side_effect=which):
            self.assertEqual(find_clipboard_command(), ClipboardCommand(("xsel", "--clipboard", "--input")))

    def test_find_wayland(self) -> None:
        with mock.patch("sys.platform", "linux"), mock.patch.dict("os.environ", {"WAYLAND_DISPLAY": "wayland-0"}), mock.patch("shutil.which", return_value="/usr/bin/wl-copy"):
            self.assertEqual(find_clipboard_command(), ClipboardCommand(("wl-copy",)))

    def test_not_found(self) -> None:
        with mock.patch("sys.platform", "linux"), mock.patch("shutil.which", return_value=None):
            with self.assertRaises(ClipboardError):
                find_clipboard_command()

    def test_copy(self) -> None:
        proc = _process(0)
        with mock.patch("subprocess.Popen", return_value=proc) as popen:
            copy_to_clipboard("<p>árvíztűrő</p>", ClipboardCommand(("xclip", "-selection", "clipboard")))
        popen.assert_called_once_with(
            ("xclip", "-selection", "clipboard"),
            stdout=subprocess.PIPE,
            stdin=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        proc.communicate.assert_called_once_with(input="<p>árvíztűrő</p>".encode("utf-8"))

    def test_copy_encoding(self) -> None:
        proc = _process(0)
        with mock.patch("subprocess.Popen", return_value=proc):
            copy_to_clipboard("text", ClipboardCommand(("clip",), encoding="utf-16"))
        proc.communicate.assert_called_once_with(input="text".encode("utf-16"))

    def test_failure(self) -> None:
        with mock.patch("subprocess.Popen", return_value=_process(1, b"Error: Can't open display")):
            with self.assertRaises(ClipboardError) as context:
                execute_subprocess(["xclip"], b"text", application="xclip")
        self.assertIn("exit code: 1", str(context.exception))
        self.assertIn("Can't open display", str(context.exception))

    def test_start_failure(self) -> None:
        with mock.patch("subprocess.Popen", side_effect=FileNotFoundError("xclip")):
            with self.assertRaises(ClipboardError):
                execute_subprocess(["xclip"], b"text", application="xclip")


if __name__ == "__main__":
    unittest.main()
