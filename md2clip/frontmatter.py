"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
import re
import typing
from typing import Any

import yaml

LOGGER = logging.getLogger(__name__)

_FRONT_MATTER_REGEXP = re.compile(r"\A---\n(.+?)^---\n", flags=re.DOTALL | re.MULTILINE)


def extract_frontmatter(text: str) -> tuple[dict[str, Any] | None, str]:
    """
    Extracts the front-matter from a Markdown document.

    Front-matter is a block of YAML at the start of the document, enclosed in lines of `---` (triple dash). It holds
    metadata (e.g. tags or aliases of a note) that is not part of the document content.

    :returns: A tuple of (1) front-matter data (if any) and (2) remaining text.
    """

    m = _FRONT_MATTER_REGEXP.match(text)
    if m is None:
        return None, text

    try:
        data = yaml.safe_load(m.group(1))
    except yaml.YAMLError:
        # a thematic break followed by text and another thematic break
        LOGGER.debug("Leading block is not valid YAML front-matter")
        return None, text

    if not isinstance(data, dict):
        return None, text

    LOGGER.debug("Skipping front-matter with keys: %s", ", ".join(str(key) for key in data))
    return typing.cast(dict[str, Any], data), text[m.end() :]
