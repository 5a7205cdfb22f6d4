"""Recursive LLM topic research: sub-queries, learnings, follow-ups and a final report."""
