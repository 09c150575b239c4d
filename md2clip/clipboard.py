"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from typing import Sequence

LOGGER = logging.getLogger(__name__)


class ClipboardError(RuntimeError):
    "Raised when text cannot be placed on the system clipboard."


@dataclass(frozen=True)
class ClipboardCommand:
    """
    A command-line utility that copies its standard input to the system clipboard.

    :param command: Full command with arguments to execute.
    :param encoding: Character encoding the utility expects on its standard input.
    """

    command: tuple[str, ...]
    encoding: str = "utf-8"

    @property
    def application(self) -> str:
        return self.command[0]


def _candidate_commands() -> list[ClipboardCommand]:
    "Clipboard utilities to try on the current platform, in order of preference."

    if sys.platform == "darwin":
        return [ClipboardCommand(("pbcopy",))]
    elif sys.platform == "win32":
        return [ClipboardCommand(("clip",), encoding="utf-16")]

    candidates: list[ClipboardCommand] = []
    if os.getenv("WAYLAND_DISPLAY"):
        candidates.append(ClipboardCommand(("wl-copy",)))
    candidates.append(ClipboardCommand(("xclip", "-selection", "clipboard")))
    candidates.append(ClipboardCommand(("xsel", "--clipboard", "--input")))
    return candidates


def find_clipboard_command() -> ClipboardCommand:
    """
    Finds a clipboard utility installed on the system.

    :raises ClipboardError: No supported utility is found.
    """

    candidates = _candidate_commands()
    for candidate in candidates:
        if shutil.which(candidate.application) is not None:
            return candidate

    names = ", ".join(candidate.application for candidate in candidates)
    raise ClipboardError(f"no clipboard utility found; install one of: {names}")


def execute_subprocess(command: Sequence[str], data: bytes, *, application: str) -> bytes:
    """
    Executes a subprocess, feeding input to stdin, and capturing output from stdout.

    :param command: Full command with arguments to execute.
    :param data: Application input as `bytes`.
    :param application: Human-readable application name for error messages.
    :returns: Application output as `bytes`.
    :raises ClipboardError: If the subprocess cannot be started or fails with a non-zero exit code.
    """

    LOGGER.debug("Executing: %s", " ".join(command))

    try:
        proc = subprocess.Popen(command, stdout=subprocess.PIPE, stdin=subprocess.PIPE, stderr=subprocess.PIPE)
    except OSError as e:
        raise ClipboardError(f"failed to start {application}") from e
    stdout, stderr = proc.communicate(input=data)

    if proc.returncode:
        message = f"failed to execute {application}; exit code: {proc.returncode}"
        LOGGER.error("Failed to execute %s; exit code: %d", application, proc.returncode)
        messages = [message]
        if stderr:
            try:
                console_error = stderr.decode("utf-8").rstrip()
                LOGGER.error(console_error)
                messages.append(f"error:\n{console_error}")
            except UnicodeDecodeError:
                LOGGER.error("%s returned binary data on stderr", application)
        raise ClipboardError("\n".join(messages))

    return stdout


def copy_to_clipboard(text: str, command: ClipboardCommand | None = None) -> None:
    """
    Places text on the system clipboard.

    :param text: Text to copy.
    :param command: Clipboard utility to use. Looked up on the system if omitted.
    :raises ClipboardError: No clipboard utility is available, or the utility failed.
    """

    if command is None:
        command = find_clipboard_command()
    execute_subprocess(command.command, text.encode(command.encoding), application=command.application)
