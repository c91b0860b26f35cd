"""
Word Wrapper - Greedy line breaking under a character budget
"""

from typing import List, Optional


def normalize_text(text: Optional[str]) -> str:
    """Collapse whitespace runs to single spaces and trim the ends"""
    if not text:
        return ""
    return " ".join(text.split())


def smart_word_wrap(
    text: Optional[str],
    max_chars_per_line: int,
    max_lines: Optional[int] = None
) -> List[str]:
    """
    Wrap text into lines of at most max_chars_per_line characters

    Words are packed greedily; a word longer than the budget is hard-split
    into chunks of exactly that length. Once max_lines lines exist the
    remaining words are dropped without an ellipsis, so callers that need
    the full text should check the auto-fit result for truncation.

    Args:
        text: Text to wrap
        max_chars_per_line: Character budget per line (values below 1 count as 1)
        max_lines: Optional maximum number of lines

    Returns:
        List of lines ([] for empty or whitespace-only text)
    """
    clean_text = normalize_text(text)
    if not clean_text:
        return []

    budget = max(1, int(max_chars_per_line))
    line_limit = None if max_lines is None else max(0, int(max_lines))

    lines: List[str] = []
    current = ""

    def full() -> bool:
        return line_limit is not None and len(lines) >= line_limit

    for word in clean_text.split(" "):
        if full():
            break

        candidate = f"{current} {word}" if current else word
        if len(candidate) <= budget:
            current = candidate
            continue

        # Word does not fit on the current line
        if current:
            lines.append(current)
            current = ""
            if full():
                break

        while len(word) > budget:
            lines.append(word[:budget])
            word = word[budget:]
            if full():
                break
        else:
            current = word

    if current and not full():
        lines.append(current)

    return lines


def count_dropped_characters(text: Optional[str], lines: List[str]) -> int:
    """Number of non-space characters of text missing from the wrapped lines"""
    total = len(normalize_text(text).replace(" ", ""))
    kept = sum(len(line.replace(" ", "")) for line in lines)
    return max(0, total - kept)
