from __future__ import annotations

MAX_SEGMENT_CHARS = 350
HEADING_RATIO = 0.8


def is_heading(line: str, ratio: float = HEADING_RATIO) -> bool:
    """A line with more than 3 letters, almost all of them uppercase."""
    letters = [c for c in line if c.isalpha()]
    if len(letters) <= 3:
        return False
    upper = sum(1 for c in letters if c.isupper())
    return upper / len(letters) > ratio


def _terminated(line: str) -> str:
    return line if line.endswith(".") else line + "."


def segment(
    text: str,
    max_chars: int = MAX_SEGMENT_CHARS,
    heading_ratio: float = HEADING_RATIO,
) -> list[str]:
    """Re-chunk cleaned article text into display-sized paragraphs.

    The text is split into sentence-ish lines on ``". "``.  Lines are
    accumulated into a paragraph while it stays under *max_chars*; a
    heading line closes whatever paragraph is open and starts the next
    one.  A single line longer than *max_chars* is kept whole.
    """
    lines = [part.strip() for part in text.split(". ")]
    lines = [line for line in lines if line]

    segments: list[str] = []
    current = ""
    for line in lines:
        line = _terminated(line)
        if not current:
            current = line
        elif is_heading(line, heading_ratio):
            segments.append(current)
            current = line
        elif len(current) + 1 + len(line) < max_chars:
            current = f"{current} {line}"
        else:
            segments.append(current)
            current = line

    if current:
        segments.append(current)

    return segments or [text]
