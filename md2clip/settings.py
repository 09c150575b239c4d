"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
import os
import typing
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from cattrs import BaseValidationError, transform_error

from .converter import OutputFormat
from .extra import merged
from .options import CodeBlockOptions, CodeBlockTheme, ImageOptions, RenderOptions, WikiTableLayout
from .serializer import object_to_yaml, yaml_to_object

LOGGER = logging.getLogger(__name__)


class ArgumentError(ValueError):
    "Raised when wrong arguments are passed to a function call."


@dataclass(frozen=True)
class ConverterSettings:
    """
    User-configured defaults for converting Markdown.

    A field with the value `None` is unset, and takes its value from a lower-priority source (e.g. command-line
    arguments override the settings file, which overrides built-in defaults).

    :param output_format: Target representation (storage format or wiki markup).
    :param theme: Color theme of code blocks (wiki markup only).
    :param show_line_numbers: Whether code blocks display line numbers.
    :param collapse: Whether code blocks are collapsed.
    :param image_width: Display width for images [px].
    :param replace_newlines: Whether (and with what) to replace line breaks in paragraphs (wiki markup only).
    :param table_layout: Arrangement of table cells (wiki markup only).
    """

    output_format: OutputFormat | None = None
    theme: CodeBlockTheme | None = None
    show_line_numbers: bool | None = None
    collapse: bool | None = None
    image_width: int | None = None
    replace_newlines: bool | str | None = None
    table_layout: WikiTableLayout | None = None

    def to_render_options(self) -> RenderOptions:
        "Creates render options, substituting built-in defaults for unset fields."

        settings = merged(self, DEFAULT_SETTINGS)
        return RenderOptions(
            code_block=CodeBlockOptions(
                theme=settings.theme or CodeBlockTheme.CONFLUENCE,
                show_line_numbers=bool(settings.show_line_numbers),
                collapse=bool(settings.collapse),
            ),
            image=ImageOptions(default_width=settings.image_width),
            replace_newlines_in_paragraphs=settings.replace_newlines or False,
            table_layout=settings.table_layout or WikiTableLayout.COLUMNS,
        )


DEFAULT_SETTINGS = ConverterSettings(
    output_format=OutputFormat.STORAGE,
    theme=CodeBlockTheme.CONFLUENCE,
    show_line_numbers=False,
    collapse=False,
    image_width=None,
    replace_newlines=False,
    table_layout=WikiTableLayout.COLUMNS,
)


def default_settings_path() -> Path:
    """
    Location of the settings file.

    The environment variable `MD2CLIP_SETTINGS` takes precedence. Otherwise, the file is looked up in the user
    configuration directory (`$XDG_CONFIG_HOME` or `~/.config`).
    """

    if path := os.getenv("MD2CLIP_SETTINGS"):
        return Path(path)

    config_home = os.getenv("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "md2clip" / "settings.yaml"


@dataclass(frozen=True)
class CodeBlockSection:
    "Code block defaults as persisted in the settings file."

    theme: CodeBlockTheme | None = None
    showLineNumbers: bool | None = None
    collapse: bool | None = None


@dataclass(frozen=True)
class ImageSection:
    "Image defaults as persisted in the settings file."

    defaultWidth: int | None = None

    def __post_init__(self) -> None:
        if self.defaultWidth is not None and self.defaultWidth < 0:
            raise ArgumentError(f"expected: non-negative integer for `image.defaultWidth`; got: {self.defaultWidth}")


@dataclass(frozen=True)
class SettingsFile:
    "Structure of the YAML settings file."

    outputFormat: OutputFormat | None = None
    codeBlock: CodeBlockSection | None = None
    image: ImageSection | None = None
    replaceNewLinesInParagraphs: bool | str | None = None
    tableLayout: WikiTableLayout | None = None


def settings_from_dict(data: dict[str, Any]) -> ConverterSettings:
    """
    Creates settings from a dictionary of the structure persisted in the settings file.

    :raises ArgumentError: A value is of the wrong type or out of range.
    """

    try:
        content = yaml_to_object(SettingsFile, data)
    except BaseValidationError as e:
        raise ArgumentError("; ".join(transform_error(e, path="settings"))) from e
    except (TypeError, ValueError) as e:
        raise ArgumentError(str(e)) from e

    code_block = content.codeBlock or CodeBlockSection()
    image = content.image or ImageSection()
    return ConverterSettings(
        output_format=content.outputFormat,
        theme=code_block.theme,
        show_line_numbers=code_block.showLineNumbers,
        collapse=code_block.collapse,
        image_width=image.defaultWidth,
        replace_newlines=content.replaceNewLinesInParagraphs,
        table_layout=content.tableLayout,
    )


def settings_to_file(settings: ConverterSettings) -> SettingsFile:
    "Produces the structure persisted in the settings file."

    code_block = CodeBlockSection(
        theme=settings.theme,
        showLineNumbers=settings.show_line_numbers,
        collapse=settings.collapse,
    )
    return SettingsFile(
        outputFormat=settings.output_format,
        codeBlock=code_block if code_block != CodeBlockSection() else None,
        image=ImageSection(settings.image_width) if settings.image_width is not None else None,
        replaceNewLinesInParagraphs=settings.replace_newlines,
        tableLayout=settings.table_layout,
    )


def load_settings(path: Path | None = None) -> ConverterSettings:
    """
    Reads user-configured defaults from a YAML file.

    :param path: Path to the settings file. Defaults to `default_settings_path()`.
    :returns: Settings read from the file, or unset settings if the file does not exist.
    :raises ArgumentError: The file is not valid YAML, or holds invalid values.
    """

    if path is None:
        path = default_settings_path()

    if not path.exists():
        LOGGER.debug("Settings file not found: %s", path)
        return ConverterSettings()

    LOGGER.debug("Reading settings from %s", path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ArgumentError(f"invalid settings file: {path}") from e

    if data is None:
        return ConverterSettings()
    if not isinstance(data, dict):
        raise ArgumentError(f"expected: mapping at top level of settings file: {path}")
    return settings_from_dict(typing.cast(dict[str, Any], data))


def save_settings(settings: ConverterSettings, path: Path | None = None) -> Path:
    """
    Writes user-configured defaults to a YAML file.

    :param settings: Settings to persist. Unset values are omitted.
    :param path: Path to the settings file. Defaults to `default_settings_path()`.
    :returns: Path to the file written.
    """

    if path is None:
        path = default_settings_path()

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(object_to_yaml(settings_to_file(settings)))
    LOGGER.info("Settings saved to %s", path)
    return path
