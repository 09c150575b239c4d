"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import enum
import logging

from .document import parse_markdown
from .options import RenderOptions
from .renderer import DocumentRenderer
from .storage import StorageFormatRenderer
from .wiki import WikiMarkupRenderer

LOGGER = logging.getLogger(__name__)


@enum.unique
class OutputFormat(enum.Enum):
    "Target representation of the converted document."

    STORAGE = "storage"
    WIKI_MARKUP = "wikimarkup"

    @property
    def display_name(self) -> str:
        match self:
            case OutputFormat.STORAGE:
                return "Storage Format"
            case OutputFormat.WIKI_MARKUP:
                return "Wiki Markup"
            case _:
                raise NotImplementedError("match not exhaustive for enumeration")


def create_renderer(output_format: OutputFormat, options: RenderOptions | None = None) -> DocumentRenderer:
    "Creates a renderer for the given output format."

    match output_format:
        case OutputFormat.STORAGE:
            return StorageFormatRenderer(options)
        case OutputFormat.WIKI_MARKUP:
            return WikiMarkupRenderer(options)
        case _:
            raise NotImplementedError("match not exhaustive for enumeration")


def convert(text: str, output_format: OutputFormat = OutputFormat.STORAGE, options: RenderOptions | None = None) -> str:
    """
    Converts Markdown text into Confluence Storage Format or Confluence wiki markup.

    Errors raised while rendering (e.g. a malformed table row) abort the conversion and propagate to the caller.

    :param text: Markdown input as a string.
    :param output_format: Target representation.
    :param options: Options that control rendering. Defaults apply if omitted.
    :returns: Converted document without leading or trailing whitespace.
    """

    LOGGER.debug("Converting %d characters of Markdown to %s", len(text), output_format.display_name)
    document = parse_markdown(text)
    renderer = create_renderer(output_format, options)
    return renderer.render(document).strip()
