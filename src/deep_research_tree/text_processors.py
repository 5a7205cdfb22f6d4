import re
from typing import Iterable, List, Optional


# ---------------------------------------------------------------------------
# Text‑processing helpers
# ---------------------------------------------------------------------------


def split_lines(text: Optional[str]) -> List[str]:
    # Model output is read as a newline‑delimited list; blank lines are not items.
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def merge_learnings(existing: Iterable[str], *batches: Iterable[str]) -> List[str]:
    # Fold batches into *existing* by exact text; first occurrence keeps its position.
    seen: set[str] = set()
    merged: List[str] = []

    for batch in (existing, *batches):
        for learning in batch:
            if learning not in seen:
                seen.add(learning)
                merged.append(learning)

    return merged


def first_line(text: Optional[str]) -> Optional[str]:
    for line in split_lines(text):
        return line
    return None


def slugify(text: str, max_words: int = 9, max_chars: int = 80) -> str:
    # Word and length caps keep file names well under the filesystem limit.
    slug = text.lower()
    slug = re.sub(r"[^a-z\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    slug = "-".join(slug.split("-")[:max_words])
    return slug.strip("-")[:max_chars].rstrip("-")
