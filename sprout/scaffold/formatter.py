"""Canonical formatting for generated project files."""

import json
import textwrap
from dataclasses import dataclass
from pathlib import PurePath
from typing import List

import yaml

TEXT = "text"
JSON = "json"
YAML = "yaml"

_PARSERS_BY_SUFFIX = {
    ".json": JSON,
    ".yml": YAML,
    ".yaml": YAML,
}


class FormatError(ValueError):
    """Raised when content cannot be parsed by the requested parser."""


@dataclass(frozen=True)
class FormatStyle:
    """House style applied to every generated file."""

    indent: int = 2
    final_newline: bool = True


DEFAULT_STYLE = FormatStyle()


def infer_parser(filename: str) -> str:
    """Pick a parser from a file name's suffix, defaulting to plain text."""
    return _PARSERS_BY_SUFFIX.get(PurePath(filename).suffix.lower(), TEXT)


def format_file(content: str, parser: str = TEXT, style: FormatStyle = DEFAULT_STYLE) -> str:
    """Return ``content`` in canonical form.

    Args:
        content: Raw text, usually an indented triple-quoted literal
        parser: One of "text", "json" or "yaml"
        style: Indentation and trailing newline settings

    Raises:
        FormatError: If the content is not valid for the parser
    """
    if parser == TEXT:
        formatted = _format_text(content)
    elif parser == JSON:
        formatted = _format_json(content, style)
    elif parser == YAML:
        formatted = _format_yaml(content, style)
    else:
        raise FormatError(f"Unknown parser '{parser}'")

    formatted = formatted.rstrip("\n")
    if style.final_newline and formatted:
        formatted += "\n"
    return formatted


def _format_text(content: str) -> str:
    lines = textwrap.dedent(content).splitlines()

    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        indent = line[: len(line) - len(line.lstrip())]
        if " " in indent and "\t" in indent:
            raise FormatError(f"Line {number}: mixed tabs and spaces in indentation")

    result: List[str] = []
    for line in lines:
        line = line.rstrip()
        if not line and (not result or not result[-1]):
            continue
        result.append(line)

    return "\n".join(result).strip("\n")


def _format_json(content: str, style: FormatStyle) -> str:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise FormatError(f"Invalid JSON: {exc}") from exc
    return json.dumps(data, indent=style.indent, ensure_ascii=False)


def _format_yaml(content: str, style: FormatStyle) -> str:
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise FormatError(f"Invalid YAML: {exc}") from exc
    if data is None:
        return ""
    return yaml.safe_dump(
        data,
        indent=style.indent,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
