"""YAML frontmatter parsing for post files."""

import re
from typing import Any

import yaml

# Header block: a "---" line at the very top, closed by the next "---" line.
FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


class FrontmatterError(ValueError):
    """Raised when a header block exists but is not a valid YAML mapping."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Split raw file text into (header_text, body).

    Returns ``(None, text)`` when the text does not open with a closed
    header block.
    """
    text = text.removeprefix("\ufeff")
    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return None, text
    return match.group(1), text[match.end() :]


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Parse YAML frontmatter from file text.

    Args:
        text: Full file contents.

    Returns:
        Tuple of (metadata mapping, body). The mapping holds exactly the
        keys present in the header; it is empty when there is no header.

    Raises:
        FrontmatterError: The header is not valid YAML or not a mapping.
    """
    header, body = split_frontmatter(text)
    if header is None:
        return {}, body

    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid YAML in frontmatter: {e}") from e

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"Frontmatter must be a mapping, got {type(data).__name__}"
        )
    return {str(key): value for key, value in data.items()}, body
