import pytest

from conftest import FakeResponse
from paraphraser.llm.client import GeminiClient
from paraphraser.pipeline.burstiness_stage import BurstinessStage
from paraphraser.pipeline.context import ParaphraseContext
from paraphraser.pipeline.quick_stage import StudentRewriteStage
from paraphraser.pipeline.refinement_stage import RefinementStage
from paraphraser.pipeline.selection_stage import SelectionStage, parse_choice
from paraphraser.pipeline.tone_stage import ToneStage
from paraphraser.pipeline.variations_stage import VariationsStage, split_variations


@pytest.fixture
def gemini():
    return GeminiClient(api_key="k", model="m", base_url="https://example.test")


def test_split_variations_trims_and_drops_empty_parts():
    raw = " one ||| two |||\n|||three|||   "

    assert split_variations(raw) == ["one", "two", "three"]


def test_variations_stage_keeps_first_three(fake_gemini, gemini):
    fake_gemini.reply("a ||| b ||| c ||| d")
    context = ParaphraseContext(text="Original paragraph.")

    result = VariationsStage(gemini).run(context)

    assert result.is_valid
    assert context.variations == ["a", "b", "c"]
    assert "Original paragraph." in fake_gemini.prompts[0]
    assert "separated by |||" in fake_gemini.prompts[0]


def test_variations_stage_fails_on_fewer_than_three(fake_gemini, gemini):
    fake_gemini.reply("only one ||| two")
    context = ParaphraseContext(text="Original paragraph.")

    result = VariationsStage(gemini).run(context)

    assert not result.is_valid
    assert result.errors == ["Gemini failed to generate 3 variations"]
    assert context.variations == []


def test_variations_stage_reports_llm_errors(fake_gemini, gemini):
    fake_gemini.respond(FakeResponse(429, {}))
    context = ParaphraseContext(text="Original paragraph.")

    result = VariationsStage(gemini).run(context)

    assert not result.is_valid
    assert result.errors == ["Gemini rate limit exceeded"]


@pytest.mark.parametrize(
    "reply, expected",
    [
        ("1", 0),
        ("2", 1),
        (" 3\n", 2),
        ("4", 0),
        ("Version 2", 0),
        ("2.", 0),
    ],
)
def test_parse_choice(reply, expected):
    assert parse_choice(reply) == expected


def test_selection_stage_picks_the_chosen_variation(fake_gemini, gemini):
    fake_gemini.reply("3")
    context = ParaphraseContext(text="t", variations=["first", "second", "third"])

    result = SelectionStage(gemini).run(context)

    assert result.is_valid
    assert context.selected_index == 2
    assert context.selected == "third"
    prompt = fake_gemini.prompts[0]
    assert "1. first" in prompt
    assert "2. second" in prompt
    assert "3. third" in prompt


def test_selection_stage_falls_back_to_first(fake_gemini, gemini):
    fake_gemini.reply("The second one reads best.")
    context = ParaphraseContext(text="t", variations=["first", "second", "third"])

    result = SelectionStage(gemini).run(context)

    assert result.is_valid
    assert context.selected == "first"


def test_refinement_uses_selected_text(fake_gemini, gemini):
    fake_gemini.reply("refined")
    context = ParaphraseContext(text="t", selected="picked variation")

    assert RefinementStage(gemini).run(context).is_valid
    assert context.refined == "refined"
    assert fake_gemini.prompts[0].rstrip().endswith("picked variation")


def test_tone_stage_interpolates_tone(fake_gemini, gemini):
    fake_gemini.reply("toned")
    context = ParaphraseContext(text="t", tone="academic", refined="refined text")

    assert ToneStage(gemini).run(context).is_valid
    assert context.toned == "toned"
    prompt = fake_gemini.prompts[0]
    assert prompt.startswith("Apply a academic tone")
    assert prompt.rstrip().endswith("refined text")


def test_burstiness_stage_writes_result(fake_gemini, gemini):
    fake_gemini.reply("final")
    context = ParaphraseContext(text="t", tone="simple", toned="toned text")

    assert BurstinessStage(gemini).run(context).is_valid
    assert context.result == "final"
    assert "the simple tone" in fake_gemini.prompts[0]
    assert fake_gemini.prompts[0].rstrip().endswith("toned text")


def test_student_rewrite_stage(fake_gemini, gemini):
    fake_gemini.reply("student voice")
    context = ParaphraseContext(text="Some text to rewrite.")

    assert StudentRewriteStage(gemini).run(context).is_valid
    assert context.result == "student voice"
    assert "university student" in fake_gemini.prompts[0]
    assert fake_gemini.prompts[0].rstrip().endswith("Original text: Some text to rewrite.")


def test_parse_choice_logs_unexpected_reply(caplog):
    with caplog.at_level("WARNING", logger="paraphraser.pipeline.selection_stage"):
        assert parse_choice("two") == 0
        assert parse_choice("2") == 1

    warnings = [r for r in caplog.records if r.levelname == "WARNING"]
    assert len(warnings) == 1
    assert "'two'" in warnings[0].getMessage()
