"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import enum
import logging

LOGGER = logging.getLogger(__name__)


@enum.unique
class AtlassianLanguage(enum.Enum):
    """
    Languages for which the Confluence code macro offers syntax highlighting.

    `NONE` stands for a code block without syntax highlighting.
    """

    ACTIONSCRIPT3 = "actionscript3"
    APPLESCRIPT = "applescript"
    BASH = "bash"
    C = "c"
    CPP = "cpp"
    CSHARP = "csharp"
    COLDFUSION = "coldfusion"
    CSS = "css"
    DELPHI = "delphi"
    DIFF = "diff"
    ERLANG = "erlang"
    GO = "go"
    GROOVY = "groovy"
    HTML = "html"
    JAVA = "java"
    JAVAFX = "javafx"
    JAVASCRIPT = "javascript"
    JSON = "json"
    KOTLIN = "kotlin"
    NONE = "none"
    PERL = "perl"
    PHP = "php"
    POWERSHELL = "powershell"
    PYTHON = "python"
    RUBY = "ruby"
    RUST = "rust"
    SASS = "sass"
    SCALA = "scala"
    SQL = "sql"
    SWIFT = "swift"
    VB = "vb"
    XML = "xml"
    YAML = "yaml"

    def __str__(self) -> str:
        return self.value


# fenced code block language identifiers (in lowercase) mapped to Confluence code macro languages
_LANGUAGES: dict[str, AtlassianLanguage] = {
    "actionscript": AtlassianLanguage.ACTIONSCRIPT3,
    "actionscript3": AtlassianLanguage.ACTIONSCRIPT3,
    "applescript": AtlassianLanguage.APPLESCRIPT,
    "bash": AtlassianLanguage.BASH,
    "c": AtlassianLanguage.C,
    "c#": AtlassianLanguage.CSHARP,
    "c++": AtlassianLanguage.CPP,
    "cfm": AtlassianLanguage.COLDFUSION,
    "coldfusion": AtlassianLanguage.COLDFUSION,
    "cpp": AtlassianLanguage.CPP,
    "cs": AtlassianLanguage.CSHARP,
    "csharp": AtlassianLanguage.CSHARP,
    "css": AtlassianLanguage.CSS,
    "delphi": AtlassianLanguage.DELPHI,
    "diff": AtlassianLanguage.DIFF,
    "erl": AtlassianLanguage.ERLANG,
    "erlang": AtlassianLanguage.ERLANG,
    "go": AtlassianLanguage.GO,
    "golang": AtlassianLanguage.GO,
    "groovy": AtlassianLanguage.GROOVY,
    "html": AtlassianLanguage.HTML,
    "java": AtlassianLanguage.JAVA,
    "javafx": AtlassianLanguage.JAVAFX,
    "javascript": AtlassianLanguage.JAVASCRIPT,
    "js": AtlassianLanguage.JAVASCRIPT,
    "json": AtlassianLanguage.JSON,
    "jsx": AtlassianLanguage.JAVASCRIPT,
    "kotlin": AtlassianLanguage.KOTLIN,
    "pas": AtlassianLanguage.DELPHI,
    "pascal": AtlassianLanguage.DELPHI,
    "patch": AtlassianLanguage.DIFF,
    "perl": AtlassianLanguage.PERL,
    "php": AtlassianLanguage.PHP,
    "pl": AtlassianLanguage.PERL,
    "powershell": AtlassianLanguage.POWERSHELL,
    "ps1": AtlassianLanguage.POWERSHELL,
    "py": AtlassianLanguage.PYTHON,
    "python": AtlassianLanguage.PYTHON,
    "rb": AtlassianLanguage.RUBY,
    "ruby": AtlassianLanguage.RUBY,
    "rust": AtlassianLanguage.RUST,
    "sass": AtlassianLanguage.SASS,
    "scala": AtlassianLanguage.SCALA,
    "scss": AtlassianLanguage.SASS,
    "sh": AtlassianLanguage.BASH,
    "shell": AtlassianLanguage.BASH,
    "sql": AtlassianLanguage.SQL,
    "swift": AtlassianLanguage.SWIFT,
    "tsx": AtlassianLanguage.JAVASCRIPT,
    "vb": AtlassianLanguage.VB,
    "vbnet": AtlassianLanguage.VB,
    "xml": AtlassianLanguage.XML,
    "yaml": AtlassianLanguage.YAML,
    "yml": AtlassianLanguage.YAML,
    "zsh": AtlassianLanguage.BASH,
}


def map_language(language: str | None) -> AtlassianLanguage:
    """
    Maps the language identifier of a fenced code block to a language supported by the Confluence code macro.

    :param language: Language identifier in the info string of the fenced code block (if any).
    :returns: Confluence language, or `AtlassianLanguage.NONE` if the language is missing or not supported.
    """

    if not language:
        return AtlassianLanguage.NONE

    mapped = _LANGUAGES.get(language.lower())
    if mapped is None:
        LOGGER.debug("Unsupported code block language: %s", language)
        return AtlassianLanguage.NONE
    return mapped
