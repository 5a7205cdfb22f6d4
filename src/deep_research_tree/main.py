# ▸ Goal: given a user research query, expand it into sub‑queries, extract learnings,
#   follow up recursively up to `depth` levels (at most `breadth` branches per node)
#   and finally synthesise every learning into one report saved as markdown.

import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from deep_research_tree.llm import (
    BackendError,
    TextGenerator,
    make_generator
)

from deep_research_tree.output import (
    OutputSink
)

from deep_research_tree.report import (
    write_report
)

from deep_research_tree.research import (
    research
)

from deep_research_tree.schemas import (
    MAX_BREADTH,
    MAX_DEPTH,
    MIN_BREADTH,
    MIN_DEPTH,
    ResearchConfig
)

logger = logging.getLogger(__name__)

DESCRIPTION = """Deep Research Assistant - Recursively research any topic using LLMs

This tool performs iterative research on a given topic by:
1. Generating specific search queries
2. Extracting key learnings
3. Generating follow-up questions
4. Recursively exploring those questions
5. Combining all findings into a final report

All intermediate results and the final report are saved as markdown files."""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="deep-research-tree",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("--query", help="Research query to investigate")
    ap.add_argument("--depth", type=int, default=2,
                    help=f"Research depth - how many levels deep to explore ({MIN_DEPTH}-{MAX_DEPTH})")
    ap.add_argument("--breadth", type=int, default=4,
                    help=f"Research breadth - how many parallel queries to explore ({MIN_BREADTH}-{MAX_BREADTH})")
    ap.add_argument("--output-dir", default="research-output",
                    help="Directory to store research outputs (will be created if it doesn't exist)")
    ap.add_argument("--model", default=None, help="Model name passed to the LLM backend (default: $DEEP_RESEARCH_MODEL or deepseek/deepseek-chat)")
    ap.add_argument("--timeout", type=float, default=None, help="Per-call timeout in seconds")
    ap.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return ap


def parse_config(argv: Optional[List[str]] = None) -> Optional[ResearchConfig]:
    # Returns None when there is nothing to research (help is printed instead).
    ap = build_parser()
    args = ap.parse_args(argv)
    if not args.query:
        ap.print_help()
        return None

    fields = {
        "query": args.query,
        "depth": args.depth,
        "breadth": args.breadth,
        "output_dir": args.output_dir,
        "verbose": args.verbose,
        "timeout": args.timeout,
    }
    model = args.model or os.getenv("DEEP_RESEARCH_MODEL")
    if model:
        fields["model"] = model
    try:
        return ResearchConfig(**fields)
    except ValidationError as err:
        messages = "; ".join(f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in err.errors())
        ap.error(messages)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def run(config: ResearchConfig, generate: Optional[TextGenerator] = None) -> str:
    generate = generate or make_generator(config.model, config.timeout)
    sink = OutputSink(config.output_dir)

    logger.info("Starting research with depth: %d breadth: %d", config.depth, config.breadth)
    logger.info("Saving output to: %s", config.output_dir)

    learnings = research(config.query, config.depth, config.breadth, [], generate, sink.save)
    report = write_report(config.query, config.depth, config.breadth, learnings, generate)
    return str(sink.save("reports", report))


def main(argv: Optional[List[str]] = None, generate: Optional[TextGenerator] = None) -> int:
    load_dotenv()
    config = parse_config(argv)
    if config is None:
        return 1
    configure_logging(config.verbose)

    try:
        location = run(config, generate)
    except BackendError as err:
        print(f"Research failed: {err}", file=sys.stderr)
        return 1

    print("Research completed! Final report saved to:", location)
    return 0


if __name__ == "__main__":
    sys.exit(main())
