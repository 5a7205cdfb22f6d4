## Prompts used by the research tree (query expansion, extraction, follow-ups) and the final report.
## Each build_* function is a pure function of its arguments.

from typing import Iterable, List


system_prompt_template = """You are an expert researcher. Today is {now}. Follow these instructions when responding:
  - You may be asked to research subjects that is after your knowledge cutoff, assume the user is right when presented with news.
  - The user is a highly experienced analyst, no need to simplify it, be as detailed as possible and make sure your response is correct.
  - Be highly organized.
  - Suggest solutions that I didn't think about.
  - Be proactive and anticipate my needs.
  - Treat me as an expert in all subject matter.
  - Mistakes erode my trust, so be accurate and thorough.
  - Provide detailed explanations, I'm comfortable with lots of detail.
  - Value good arguments over authorities, the source is irrelevant.
  - You may use high levels of speculation or prediction, just flag it for me."""

queries_prompt = """Given the following prompt from the user, generate a list of questions to research the topic. \
Return a maximum of {max_queries} queries, but feel free to return less if the original prompt is clear. \
Make sure each query is unique and not similar to each other.

<Important Guidelines>
- Output one query per line.
- Do not number the queries and do not include any extra text.
</Important Guidelines>

<prompt>{query}</prompt>
"""

queries_learnings_suffix = """
Here are some learnings from previous research, use them to generate more specific queries:
{learnings}
"""

research_prompt = """Research the following query in detail. \
Cover the key entities, mechanisms, numbers and dates, and flag anything speculative.

<query>{query}</query>
"""

extraction_prompt = """Given the following contents from a research document for the query <query>{query}</query>, \
generate a list of learnings from the contents. Return a maximum of {max_learnings} learnings, \
but feel free to return less if the contents are clear. Make sure each learning is unique and not similar to each other.

<Instructions>
- The learnings should be concise and to the point, as detailed and information dense as possible.
- Include any entities like people, places, companies, products and things, as well as any exact metrics, numbers, or dates.
- The learnings will be used to research the topic further.
- Output one learning per line, with no numbering and no extra text.
</Instructions>

<contents>{contents}</contents>"""

follow_up_prompt = """Given the following query from the user, ask some follow up questions to clarify the research direction. \
Return a maximum of {max_questions} questions, but feel free to return less if the original query is clear. \
Output one question per line and do not include any extra text.

<query>{query}</query>"""

final_report_prompt = """Given the following prompt from the user, write a final report on the topic using the learnings from research. \
Make it as detailed as possible, aim for 3 or more pages, include ALL the learnings from research:

<prompt>{query}</prompt>

Here are all the learnings from previous research:

<learnings>
{learnings}
</learnings>"""


def system_prompt(now: str) -> str:
    return system_prompt_template.format(now=now)


def build_queries_prompt(query: str, max_queries: int, learnings: Iterable[str] = ()) -> str:
    prompt = queries_prompt.format(query=query, max_queries=max_queries)
    learnings = list(learnings)
    if learnings:
        prompt = prompt + queries_learnings_suffix.format(learnings="\n".join(learnings))
    return prompt


def build_research_prompt(query: str) -> str:
    return research_prompt.format(query=query)


def build_extraction_prompt(query: str, contents: List[str], max_learnings: int) -> str:
    wrapped = "\n".join(f"<content>\n{content}\n</content>" for content in contents)
    return extraction_prompt.format(query=query, contents=wrapped, max_learnings=max_learnings)


def build_follow_up_prompt(query: str, max_questions: int) -> str:
    return follow_up_prompt.format(query=query, max_questions=max_questions)


def build_final_report_prompt(query: str, learnings: Iterable[str]) -> str:
    wrapped = "\n".join(f"<learning>\n{learning}\n</learning>" for learning in learnings)
    return final_report_prompt.format(query=query, learnings=wrapped)
