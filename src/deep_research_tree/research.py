import logging
from typing import Callable, List, Optional, Sequence

from deep_research_tree.llm import (
    TextGenerator,
    call_llm
)

from deep_research_tree.prompts import (
    build_queries_prompt,
    build_research_prompt,
    build_extraction_prompt,
    build_follow_up_prompt
)

from deep_research_tree.text_processors import (
    merge_learnings,
    split_lines
)

logger = logging.getLogger(__name__)

# How many items each prompt asks the model for; the tree still takes at most `breadth`.
NUM_QUERIES = 10
NUM_LEARNINGS = 10
NUM_QUESTIONS = 10

# (category, content) -> location
Save = Callable[[str, str], object]


def _save(save: Optional[Save], category: str, content: str) -> None:
    if save is not None:
        save(category, content)


# ---------------------------------------------------------------------------
# Per‑node steps — one LLM call each.
# ---------------------------------------------------------------------------

def generate_queries(query: str, learnings: Sequence[str], generate: TextGenerator, save: Optional[Save] = None) -> List[str]:
    logger.info("Generating queries for: %s", query)
    if learnings:
        logger.info("Using %d previous learnings", len(learnings))
    raw = generate(None, build_queries_prompt(query, NUM_QUERIES, learnings))
    _save(save, "queries", raw)
    queries = split_lines(raw)
    logger.info("Generated %d queries", len(queries))
    return queries


def extract_learnings(query: str, content: str, generate: TextGenerator, save: Optional[Save] = None) -> List[str]:
    logger.info("Extracting learnings for: %s", query)
    raw = generate(None, build_extraction_prompt(query, [content], NUM_LEARNINGS))
    _save(save, "learnings", raw)
    learnings = split_lines(raw)
    logger.info("Extracted %d learnings", len(learnings))
    return learnings


def research_query(query: str, generate: TextGenerator, save: Optional[Save] = None) -> List[str]:
    # Ask for a detailed answer, then distil it into one learning per line.
    logger.info("Researching query: %s", query)
    content = generate(None, build_research_prompt(query))
    return extract_learnings(query, content, generate, save)


def generate_follow_up_questions(learnings: Sequence[str], generate: TextGenerator, save: Optional[Save] = None) -> List[str]:
    logger.info("Generating follow-up questions from %d learnings", len(learnings))
    raw = generate(None, build_follow_up_prompt("\n".join(learnings), NUM_QUESTIONS))
    _save(save, "questions", raw)
    questions = split_lines(raw)
    logger.info("Generated %d follow-up questions", len(questions))
    return questions


# ---------------------------------------------------------------------------
# research() — recursive tree controller.
# ---------------------------------------------------------------------------
# Signature legend:
# • depth     – levels left to expand; 0 returns `learnings` untouched
# • breadth   – cap on sub‑queries and follow‑ups taken at each node
# • learnings – knowledge carried in from the parent (never mutated)
# • generate  – (system_prompt, user_prompt) -> text
# • save      – optional (category, content) sink for the audit trail
# ---------------------------------------------------------------------------

def research(query: str, depth: int, breadth: int, learnings: Sequence[str] = (), generate: Optional[TextGenerator] = None, save: Optional[Save] = None) -> List[str]:
    if depth < 0:
        raise ValueError(f"depth must be >= 0, got {depth}")
    if breadth < 1:
        raise ValueError(f"breadth must be >= 1, got {breadth}")
    generate = generate or call_llm

    logger.info("Starting research iteration (depth=%d, breadth=%d, learnings=%d)", depth, breadth, len(learnings))
    if depth == 0:
        logger.info("Reached maximum depth, returning current learnings")
        return list(learnings)

    # 1. expand the query and research each selected sub‑query in order
    queries = generate_queries(query, learnings, generate, save)[:breadth]
    logger.info("Researching %d queries", len(queries))
    new_learnings = [research_query(sub_query, generate, save) for sub_query in queries]

    combined = merge_learnings(learnings, *new_learnings)
    logger.info("Combined learnings count: %d", len(combined))

    # 2. every child starts from the same `combined`; siblings only meet in the final merge
    questions = generate_follow_up_questions(combined, generate, save)[:breadth]
    if questions:
        logger.info("Following up on %d questions", len(questions))
    sub_results = []
    for question in questions:
        logger.info("Diving deeper into: %s", question)
        sub_results.append(research(question, depth - 1, breadth, combined, generate, save))

    return merge_learnings(combined, *sub_results)
