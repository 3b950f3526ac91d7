import re
from typing import Iterator, List

LINEBREAKS = re.compile(r"([\r\n]+)")
WHITESPACE = re.compile(r"\s+")


def is_blank(text: str) -> bool:
    """Return True for empty or whitespace-only text."""
    return not text.strip()


def split_lines(text: str) -> Iterator[str]:
    """
    Split ``text`` into lines, keeping each run of linebreaks attached to the
    line before it so that ``"".join(split_lines(text)) == text``.

    Any blank piece (a linebreak run, or whitespace between two runs) closes
    the current line. The trailing remainder is always yielded, even if empty.
    """
    line = ""
    for part in LINEBREAKS.split(text):
        line += part
        if is_blank(part):
            yield line
            line = ""
    yield line


def words(fragment: str) -> List[str]:
    """Whitespace-delimited words of the stripped fragment; never empty."""
    return WHITESPACE.split(fragment.strip())


def word_count(fragment: str) -> int:
    return len(words(fragment))


def last_word(fragment: str) -> str:
    return words(fragment)[-1].strip()
