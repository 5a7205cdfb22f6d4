import logging
from pathlib import Path
from typing import Union

from deep_research_tree.schemas import (
    CATEGORIES
)

from deep_research_tree.text_processors import (
    first_line,
    slugify
)

logger = logging.getLogger(__name__)


class OutputSink:
    """Writes every model output under <output_dir>/<category>/<slug>.md."""

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)

    def save(self, category: str, content: str) -> Path:
        if category not in CATEGORIES:
            raise ValueError(f"unknown output category {category!r}, expected one of {CATEGORIES}")

        directory = self.output_dir / category
        directory.mkdir(parents=True, exist_ok=True)

        # Name the file after the first line of the output; never clobber an earlier one.
        stem = slugify(first_line(content) or "") or "untitled"
        path = directory / f"{stem}.md"
        suffix = 2
        while path.exists():
            path = directory / f"{stem}-{suffix}.md"
            suffix += 1

        path.write_text(content, encoding="utf-8")
        logger.info("Saved %s output to %s", category, path)
        return path
