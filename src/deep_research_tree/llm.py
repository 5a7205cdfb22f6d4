import logging
from datetime import datetime, timezone
from functools import partial
from typing import Callable, Dict, List, Optional

from crewai import LLM

from deep_research_tree.prompts import (
    system_prompt
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "deepseek/deepseek-chat"

# (system_prompt, user_prompt) -> generated text
TextGenerator = Callable[[Optional[str], str], str]


class BackendError(RuntimeError):
    """The generation backend could not produce a response."""


def build_messages(user_prompt: str, extra_system: Optional[str] = None) -> List[Dict[str, str]]:
    # The researcher instruction always goes first; an extra system prompt is layered after it.
    now = datetime.now(timezone.utc).isoformat()
    messages = [{"role": "system", "content": system_prompt(now)}]
    if extra_system:
        messages.append({"role": "system", "content": extra_system})
    messages.append({"role": "user", "content": user_prompt})
    return messages


def call_llm(system: Optional[str], user_prompt: str, model: str = DEFAULT_MODEL, timeout: Optional[float] = None) -> str:
    messages = build_messages(user_prompt, system)
    try:
        raw = LLM(model=model, timeout=timeout).call(messages=messages)
    except Exception as err:
        logger.info("LLM call to %s failed: %s", model, err)
        raise BackendError(f"generation failed for model {model}: {err}") from err
    return raw or ""


def make_generator(model: str = DEFAULT_MODEL, timeout: Optional[float] = None) -> TextGenerator:
    return partial(call_llm, model=model, timeout=timeout)
