"""
Convert Markdown to Confluence wiki markup or storage format.

Reads a Markdown file (or a span of lines in it), converts Markdown content into Confluence Storage Format (XHTML) or
Confluence wiki markup, and places the result on the clipboard, ready to be pasted into the Confluence editor.

Copyright 2022-2026, Levente Hunyadi
"""

import argparse
import logging
import os.path
import sys
from pathlib import Path

from . import __version__
from .clipboard import ClipboardError, copy_to_clipboard
from .converter import OutputFormat, convert
from .document import DocumentError
from .extra import merged
from .frontmatter import extract_frontmatter
from .options import CodeBlockTheme, WikiTableLayout
from .selection import LineSpan, parse_line_span, select_lines
from .settings import ArgumentError, ConverterSettings, load_settings, save_settings
from .wiki import MalformedRowError


class Arguments(argparse.Namespace):
    mdpath: str
    loglevel: str
    output_format: str | None
    lines: str | None
    theme: str | None
    show_line_numbers: bool | None
    collapse: bool | None
    image_width: int | None
    replace_newlines: bool | str | None
    table_layout: str | None
    settings: Path | None
    save_settings: bool
    keep_frontmatter: bool
    stdout: bool
    output: Path | None


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected: integer; got: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected: non-negative integer; got: {number}")
    return number


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    parser.prog = os.path.basename(os.path.dirname(__file__))
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "mdpath",
        nargs="?",
        default="-",
        help="Path to Markdown file to convert. Use '-' (default) to read from standard input.",
    )
    parser.add_argument(
        "-l",
        "--loglevel",
        choices=[
            logging.getLevelName(level).lower()
            for level in (
                logging.DEBUG,
                logging.INFO,
                logging.WARN,
                logging.ERROR,
                logging.CRITICAL,
            )
        ],
        default=logging.getLevelName(logging.INFO),
        help="Use this option to set the log verbosity.",
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="output_format",
        choices=[item.value for item in OutputFormat],
        default=None,
        help="Output format: Confluence Storage Format (XHTML) or Confluence wiki markup (default: 'storage').",
    )
    parser.add_argument(
        "--lines",
        help="Convert only a span of lines, specified as START:END with 1-based line numbers (inclusive).",
    )
    parser.add_argument(
        "--theme",
        choices=[item.value for item in CodeBlockTheme],
        default=None,
        help="Color theme for code blocks in wiki markup (default: 'Confluence').",
    )
    parser.add_argument(
        "--line-numbers",
        dest="show_line_numbers",
        action="store_true",
        default=None,
        help="Display line numbers in code blocks.",
    )
    parser.add_argument(
        "--no-line-numbers",
        dest="show_line_numbers",
        action="store_false",
        help="Hide line numbers in code blocks.",
    )
    parser.add_argument(
        "--collapse",
        dest="collapse",
        action="store_true",
        default=None,
        help="Collapse code blocks.",
    )
    parser.add_argument(
        "--no-collapse",
        dest="collapse",
        action="store_false",
        help="Expand code blocks.",
    )
    parser.add_argument(
        "--image-width",
        dest="image_width",
        type=_non_negative_int,
        default=None,
        help="Display width for images [px]. If omitted, images keep their original size.",
    )
    parser.add_argument(
        "--replace-newlines",
        dest="replace_newlines",
        nargs="?",
        const=True,
        default=None,
        metavar="TEXT",
        help="Join lines in a paragraph in wiki markup with a space, or with TEXT if given.",
    )
    parser.add_argument(
        "--no-replace-newlines",
        dest="replace_newlines",
        action="store_const",
        const=False,
        help="Keep line breaks in paragraphs in wiki markup.",
    )
    parser.add_argument(
        "--table-layout",
        dest="table_layout",
        choices=[item.value for item in WikiTableLayout],
        default=None,
        help="Arrangement of table cells in wiki markup (default: 'columns').",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Path to the settings file with user defaults. Overrides the environment variable MD2CLIP_SETTINGS.",
    )
    parser.add_argument(
        "--save-settings",
        dest="save_settings",
        action="store_true",
        default=False,
        help="Save options passed on the command line as user defaults.",
    )
    parser.add_argument(
        "--keep-frontmatter",
        dest="keep_frontmatter",
        action="store_true",
        default=False,
        help="Convert YAML front-matter as document content instead of skipping it.",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--stdout",
        action="store_true",
        default=False,
        help="Write output to standard output instead of the clipboard.",
    )
    group.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write output to a file instead of the clipboard.",
    )
    return parser


def _settings_from_args(args: Arguments) -> ConverterSettings:
    return ConverterSettings(
        output_format=OutputFormat(args.output_format) if args.output_format else None,
        theme=CodeBlockTheme(args.theme) if args.theme else None,
        show_line_numbers=args.show_line_numbers,
        collapse=args.collapse,
        image_width=args.image_width,
        replace_newlines=args.replace_newlines,
        table_layout=WikiTableLayout(args.table_layout) if args.table_layout else None,
    )


def _read_source(mdpath: str) -> str:
    if mdpath == "-":
        return sys.stdin.read()
    with open(mdpath, "r", encoding="utf-8") as f:
        return f.read()


def main() -> None:
    parser = get_parser()
    args = Arguments()
    parser.parse_args(namespace=args)

    logging.basicConfig(
        level=getattr(logging, args.loglevel.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
    )

    try:
        span: LineSpan | None = parse_line_span(args.lines) if args.lines is not None else None
        settings = merged(_settings_from_args(args), load_settings(args.settings))
    except ArgumentError as e:
        parser.error(str(e))

    if args.save_settings:
        save_settings(settings, args.settings)

    output_format = settings.output_format or OutputFormat.STORAGE
    try:
        text = _read_source(args.mdpath)
        if span is not None:
            text = select_lines(text, span)
        if not args.keep_frontmatter:
            _, text = extract_frontmatter(text)

        result = convert(text, output_format, settings.to_render_options())

        if args.stdout:
            sys.stdout.write(result)
            sys.stdout.write("\n")
        elif args.output is not None:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(result)
            logging.info("Written to %s (%s)", args.output, output_format.display_name)
        else:
            copy_to_clipboard(result)
            logging.info("Copied to clipboard (%s)", output_format.display_name)
    except (ClipboardError, DocumentError, MalformedRowError, OSError) as e:
        logging.error(e)
        sys.exit(1)


if __name__ == "__main__":
    main()
