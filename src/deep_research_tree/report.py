import logging
from typing import Optional, Sequence

from deep_research_tree.llm import (
    TextGenerator,
    call_llm
)

from deep_research_tree.prompts import (
    build_final_report_prompt
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# write_report — turn the final knowledge set into one report, in a single call.
# ---------------------------------------------------------------------------

def write_report(query: str, depth: int, breadth: int, learnings: Sequence[str], generate: Optional[TextGenerator] = None) -> str:
    generate = generate or call_llm

    logger.info("Generating final report from %d learnings", len(learnings))
    # depth/breadth go into the prompt for provenance only
    header = (
        f"Research Query: {query}\n"
        f"Research Depth: {depth}\n"
        f"Research Breadth: {breadth}"
    )
    return generate(None, build_final_report_prompt(header, learnings))
