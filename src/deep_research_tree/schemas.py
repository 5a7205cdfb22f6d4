from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from deep_research_tree.llm import (
    DEFAULT_MODEL
)

# ---------------------------------------------------------------------------
# Pydantic schemas — run configuration is validated here before any LLM call.
# ---------------------------------------------------------------------------

CATEGORIES = ("queries", "learnings", "questions", "reports")

MIN_DEPTH, MAX_DEPTH = 1, 5
MIN_BREADTH, MAX_BREADTH = 2, 10


class ResearchConfig(BaseModel):
    """Everything the entry point needs to drive one research session."""
    query: str
    depth: int = Field(default=2, ge=MIN_DEPTH, le=MAX_DEPTH)
    breadth: int = Field(default=4, ge=MIN_BREADTH, le=MAX_BREADTH)
    output_dir: Path = Path("research-output")
    verbose: bool = False
    model: str = DEFAULT_MODEL
    timeout: Optional[float] = Field(default=None, gt=0)

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("query must not be empty")
        return value
