import re
from typing import Optional

_ARTICLE_RE = re.compile(r'^an? ')


def normalize_answer(text: Optional[str]) -> str:
    """Reduce an answer to the form used for comparison.

    Lowercases, drops the italic markup tokens the clue source embeds,
    double quotes, a leading "a "/"an " article and every space.
    """
    friendly = (text or '').lower()
    friendly = friendly.replace('<i>', '', 1)
    friendly = friendly.replace('</i>', '', 1)
    friendly = friendly.replace('"', '')
    friendly = friendly.strip()
    # Article strip runs before spaces are removed
    friendly = _ARTICLE_RE.sub('', friendly)
    friendly = friendly.replace(' ', '')
    return friendly.strip()


def is_correct(candidate: Optional[str], canonical: Optional[str]) -> bool:
    return normalize_answer(candidate) == normalize_answer(canonical)
