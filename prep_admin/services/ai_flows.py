# prep_admin/services/ai_flows.py
"""
Generative-AI helpers used by the question forms.

Each flow is one prompt -> one JSON answer from Gemini, parsed into a fixed
output model. No retries and no streaming: any failure raises AIFlowError
and the caller reports it.
"""
import json
import logging

import google.generativeai as genai
from pydantic import ValidationError

from prep_admin.core.config import settings
from prep_admin.schemas.ai import SanityCheckResult, TagSuggestion

logger = logging.getLogger(__name__)


class AIFlowError(Exception):
    pass


SANITY_CHECK_PROMPT = (
    "You are an expert in Arabic grammar and syntax. Your task is to check the "
    "grammatical correctness and vocabulary of an Arabic exam question and "
    "suggest corrections if needed.\n\n"
    "Question: {question}\n\n"
    "Respond with JSON only, in the form "
    '{{"isSane": true/false, "explanation": "..."}}. '
    "When the question is not correct, the explanation must contain the "
    "suggested corrections."
)

SUGGEST_TAGS_PROMPT = (
    "You are an expert in categorizing educational questions. Based on the "
    "following question, suggest relevant tags that can be used to "
    "categorize it.\n\n"
    "Question: {question_text}\n\n"
    'Respond with JSON only, in the form {{"suggestedTags": ["...", "..."]}}.'
)


def _generate_json(prompt: str) -> str:
    if not settings.GEMINI_API_KEY:
        raise AIFlowError("GEMINI_API_KEY is not configured")

    try:
        genai.configure(api_key=settings.GEMINI_API_KEY)
        model = genai.GenerativeModel(settings.GEMINI_MODEL)
        response = model.generate_content(
            prompt,
            generation_config={"response_mime_type": "application/json"},
        )
        return response.text
    except Exception as e:
        logger.error(f"Gemini request failed: {e}", exc_info=True)
        raise AIFlowError("AI service request failed") from e


def arabic_question_sanity_check(question: str) -> SanityCheckResult:
    text = _generate_json(SANITY_CHECK_PROMPT.format(question=question))
    try:
        result = SanityCheckResult.model_validate_json(text)
    except ValidationError as e:
        logger.error(f"Unexpected sanity check output: {text!r}")
        raise AIFlowError("AI service returned an invalid answer") from e

    logger.info(f"Sanity check: is_sane={result.is_sane}")
    return result


def suggest_question_tags(question_text: str) -> TagSuggestion:
    text = _generate_json(SUGGEST_TAGS_PROMPT.format(question_text=question_text))
    try:
        data = json.loads(text)
        # the model sometimes answers with the bare array
        if isinstance(data, list):
            data = {"suggestedTags": data}
        result = TagSuggestion.model_validate(data)
    except (ValueError, ValidationError) as e:
        logger.error(f"Unexpected tag suggestion output: {text!r}")
        raise AIFlowError("AI service returned an invalid answer") from e

    result.suggested_tags = [tag.strip() for tag in result.suggested_tags if tag.strip()]
    logger.info(f"Suggested tags: {result.suggested_tags}")
    return result
