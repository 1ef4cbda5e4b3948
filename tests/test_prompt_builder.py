from layerproof.analysis.prompt_builder import PromptBuilder
from layerproof.types import TextFragment


def test_prompt_builder_builds_messages():
    fragment = TextFragment(id="a", name="Headline", text="Ths is a tst.")
    messages = PromptBuilder().build_messages(fragment)

    assert [m["role"] for m in messages] == ["system", "user"]
    assert '"Ths is a tst."' in messages[1]["content"]


def test_system_prompt_constrains_output():
    prompt = PromptBuilder().system_prompt

    assert "DO NOT flag style issues" in prompt
    assert "placeholder" in prompt
    assert '"issues"' in prompt
    assert "0-indexed" in prompt
