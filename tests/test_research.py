import logging

import pytest

from deep_research_tree import research as research_module
from deep_research_tree.llm import BackendError
from deep_research_tree.research import research

from fakes import ScriptedBackend


def test_zero_depth_returns_inbound_without_backend_calls() -> None:
    backend = ScriptedBackend(queries="A\nB")
    assert research("X", 0, 4, [], backend) == []
    assert research("X", 0, 4, ["k1", "k2"], backend) == ["k1", "k2"]
    assert backend.calls == []


def test_zero_depth_does_not_alias_inbound() -> None:
    inbound = ["k1"]
    result = research("X", 0, 2, inbound, ScriptedBackend())
    result.append("k2")
    assert inbound == ["k1"]


def test_single_level_collects_one_learning_per_sub_query() -> None:
    backend = ScriptedBackend(
        queries={"X": "A\nB"},
        extract={"A": "learn A", "B": "learn B"},
        follow_up="",
    )
    assert research("X", 1, 2, [], backend) == ["learn A", "learn B"]
    assert backend.kinds() == ["queries", "research", "extract", "research", "extract", "follow_up"]


def test_research_answer_reaches_extraction_prompt() -> None:
    backend = ScriptedBackend(
        queries={"X": "A\nB"},
        research={"A": "RAW-A", "B": "RAW-B"},
    )
    research("X", 1, 2, [], backend)
    extract_prompts = backend.prompts("extract")
    assert "<content>\nRAW-A\n</content>" in extract_prompts[0]
    assert "<content>\nRAW-B\n</content>" in extract_prompts[1]
    assert "RAW-A" not in extract_prompts[1]


def test_sibling_duplicates_are_kept_once() -> None:
    backend = ScriptedBackend(
        queries={"X": "A\nB"},
        extract={"A": "Water boils at 100C\nIce melts at 0C", "B": "Water boils at 100C"},
    )
    result = research("X", 1, 2, [], backend)
    assert result == ["Water boils at 100C", "Ice melts at 0C"]


def test_breadth_caps_sub_queries() -> None:
    backend = ScriptedBackend(queries={"X": "q1\nq2\nq3\nq4\nq5"})
    research("X", 1, 2, [], backend)
    assert backend.topics("research") == ["q1", "q2"]


def test_blank_lines_do_not_count_against_breadth() -> None:
    backend = ScriptedBackend(queries={"X": "   \n\nq1\n \t \nq2\nq3\n"})
    research("X", 1, 2, [], backend)
    assert backend.topics("research") == ["q1", "q2"]


def test_breadth_caps_follow_up_questions() -> None:
    backend = ScriptedBackend(
        queries=lambda topic: f"sub {topic}",
        extract=lambda topic: f"fact from {topic}",
        follow_up=lambda learnings: "f1\nf2\nf3\nf4",
    )
    research("X", 2, 2, [], backend)
    # root query plus one per followed-up question
    assert backend.topics("queries") == ["X", "f1", "f2"]


def test_inbound_learnings_stay_first_and_in_order() -> None:
    backend = ScriptedBackend(
        queries={"X": "A"},
        extract={"A": "new\nk2"},
    )
    result = research("X", 1, 2, ["k1", "k2"], backend)
    assert result == ["k1", "k2", "new"]


def test_inbound_learnings_reach_queries_prompt() -> None:
    backend = ScriptedBackend()
    research("X", 1, 2, ["known fact"], backend)
    assert "known fact" in backend.prompts("queries")[0]


def test_empty_output_everywhere_is_not_an_error() -> None:
    backend = ScriptedBackend()
    assert research("X", 3, 4, ["k1"], backend) == ["k1"]
    assert backend.kinds() == ["queries", "follow_up"]


def test_depth_bound_and_call_counts() -> None:
    backend = ScriptedBackend(
        queries=lambda topic: f"sub {topic}",
        extract=lambda topic: f"fact from {topic}",
        follow_up=lambda learnings: "left\nright",
    )
    result = research("X", 3, 2, [], backend)
    # 1 root + 2 children + 4 grandchildren expand; great-grandchildren hit the base case
    assert len(backend.topics("queries")) == 7
    assert len(backend.topics("follow_up")) == 7
    assert len(result) == len(set(result))


def test_siblings_start_from_the_same_combined_learnings() -> None:
    backend = ScriptedBackend(
        queries={"root": "q-root", "f1": "q-f1", "f2": "q-f2"},
        extract={"q-root": "root fact", "q-f1": "from f1", "q-f2": "from f2"},
        follow_up={"root fact": "f1\nf2"},
    )
    result = research("root", 2, 2, [], backend)

    assert result == ["root fact", "from f1", "from f2"]
    f2_prompt = backend.prompts("queries")[2]
    assert "root fact" in f2_prompt
    assert "from f1" not in f2_prompt


def test_follow_up_prompt_lists_combined_learnings() -> None:
    backend = ScriptedBackend(
        queries={"X": "A\nB"},
        extract={"A": "one", "B": "two"},
    )
    research("X", 1, 2, ["zero"], backend)
    assert backend.topics("follow_up") == ["zero\none\ntwo"]


def test_backend_error_aborts_the_tree() -> None:
    backend = ScriptedBackend(queries={"X": "A\nB"}, fail_on="extract")
    with pytest.raises(BackendError):
        research("X", 2, 2, [], backend)
    assert backend.kinds() == ["queries", "research", "extract"]


@pytest.mark.parametrize("depth, breadth", [(-1, 2), (1, 0)])
def test_invalid_arguments_rejected_before_any_call(depth: int, breadth: int) -> None:
    backend = ScriptedBackend()
    with pytest.raises(ValueError):
        research("X", depth, breadth, [], backend)
    assert backend.calls == []


def test_outputs_are_saved_by_category() -> None:
    saved = []
    backend = ScriptedBackend(
        queries={"X": "A"},
        extract={"A": "fact"},
        follow_up={"fact": "why?"},
    )
    research("X", 1, 2, [], backend, lambda category, content: saved.append((category, content)))
    assert saved == [("queries", "A"), ("learnings", "fact"), ("questions", "why?")]


def test_default_generator_is_call_llm(monkeypatch) -> None:
    calls = []

    def fake_call_llm(system, prompt):
        calls.append(prompt)
        return ""

    monkeypatch.setattr(research_module, "call_llm", fake_call_llm)
    assert research("X", 1, 2) == []
    assert len(calls) == 2


def test_base_case_is_logged(caplog) -> None:
    caplog.set_level(logging.INFO, logger="deep_research_tree.research")
    research("X", 0, 2, [], ScriptedBackend())
    assert "Reached maximum depth" in caplog.text
