import pytest

from prep_admin.core.config import settings
from prep_admin.services import ai_flows


def test_sanity_check_parses_the_answer(monkeypatch):
    prompts = []

    def fake_generate(prompt):
        prompts.append(prompt)
        return '{"isSane": false, "explanation": "استخدم \\"إن\\" بدلا من \\"أن\\""}'

    monkeypatch.setattr(ai_flows, "_generate_json", fake_generate)

    result = ai_flows.arabic_question_sanity_check("ما هو اعراب الكلمة؟")

    assert result.is_sane is False
    assert "إن" in result.explanation
    assert "ما هو اعراب الكلمة؟" in prompts[0]


def test_sanity_check_rejects_malformed_answers(monkeypatch):
    monkeypatch.setattr(ai_flows, "_generate_json", lambda prompt: "not json")

    with pytest.raises(ai_flows.AIFlowError):
        ai_flows.arabic_question_sanity_check("سؤال")


@pytest.mark.parametrize("answer", [
    '{"suggestedTags": [" Nahw ", "Sarf", "  "]}',
    '[" Nahw ", "Sarf"]',
])
def test_tag_suggestions_are_trimmed(monkeypatch, answer):
    monkeypatch.setattr(ai_flows, "_generate_json", lambda prompt: answer)

    result = ai_flows.suggest_question_tags("ما هو الفاعل؟")

    assert result.suggested_tags == ["Nahw", "Sarf"]


def test_missing_api_key_fails_fast(monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", None)

    with pytest.raises(ai_flows.AIFlowError):
        ai_flows.suggest_question_tags("ما هو الفاعل؟")
