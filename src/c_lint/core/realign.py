"""Rebuild a file's own text from preprocessor output.

The preprocessor interleaves expanded text with GCC line markers::

    # 12 "<stdin>" 2

meaning "the following lines are line 12 onwards of <stdin>". Keeping only the
segments attributed to the target file, each at its declared line, yields a text
whose line N is what line N of the original file expands to.
"""

import logging
import re
from dataclasses import dataclass

from c_lint.core.parsing import split_lines
from c_lint.errors import MalformedDirectiveError

logger = logging.getLogger(__name__)

STDIN_PATH = "<stdin>"

_MARKER_RE = re.compile(r'^#(?:line)?\s+(\d+)\s+"((?:[^"\\]|\\.)*)"((?:\s+\d+)*)\s*$')
_MARKER_PREFIX_RE = re.compile(r"^#(?:line)?\s*\d")


@dataclass(frozen=True)
class LineMarker:
    line: int
    path: str
    flags: tuple[int, ...] = ()


def parse_line_marker(line: str) -> LineMarker | None:
    """Parse a line marker, or return None for any other line.

    Raises MalformedDirectiveError for lines that start like a marker but are not one.
    """
    match = _MARKER_RE.match(line)
    if match is None:
        if _MARKER_PREFIX_RE.match(line):
            raise MalformedDirectiveError(line)
        return None
    number, path, flags = match.groups()
    return LineMarker(
        line=int(number),
        path=path.replace('\\"', '"').replace("\\\\", "\\"),
        flags=tuple(int(f) for f in flags.split()),
    )


def realign(raw_output: str, target_file_name: str = STDIN_PATH) -> str:
    lines: list[str] = []
    keep = False
    segment_start: int | None = None
    for raw_line in split_lines(raw_output):
        try:
            marker = parse_line_marker(raw_line)
        except MalformedDirectiveError as exc:
            logger.warning("Skipping %s", exc)
            continue

        if marker is not None:
            # line 0 belongs to the preprocessor's own prologue
            keep = marker.path == target_file_name and marker.line > 0
            segment_start = marker.line if keep else None
            continue

        if not keep:
            continue
        if segment_start is not None:
            if len(lines) < segment_start - 1:
                lines.extend([""] * (segment_start - 1 - len(lines)))
            segment_start = None
        lines.append(raw_line)

    if not lines:
        return ""
    return "\n".join(lines) + "\n"
