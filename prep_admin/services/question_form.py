# prep_admin/services/question_form.py
"""
Question form handling shared by the new, edit and add-to-lesson flows.

``QuestionFormState`` holds what a user is editing: the shared fields plus
the state of the currently selected question type only. Changing the type
swaps in fresh state for the new type, so fields of the old type can never
reach validation or storage.

``build_question_payload`` turns a validated form into the domain model the
question service stores.
"""
import uuid
from typing import Any, Dict, List, Optional

from prep_admin.schemas.question import (
    QUESTION_TYPES,
    FillInTheBlanksQuestion,
    MCQQuestion,
    Option,
    QuestionBase,
    ShortAnswerQuestion,
    TrueFalseQuestion,
    true_false_options,
)
from prep_admin.schemas.question_form import (
    MAX_OPTIONS,
    MIN_ANSWERS,
    MIN_OPTIONS,
    QUESTION_FORM_ADAPTER,
    FillInTheBlanksForm,
    MCQForm,
    QuestionFormBase,
    ShortAnswerForm,
    TrueFalseForm,
)

SHARED_FIELDS = (
    "subject_id",
    "question_text",
    "difficulty",
    "image",
    "image_hint",
    "tag_ids",
    "lesson_id",
    "is_sane",
    "sanity_explanation",
)


class FormStateError(ValueError):
    pass


def _fresh_variant(question_type: str) -> Dict[str, Any]:
    if question_type == "mcq":
        return {"options": [{"text": ""}, {"text": ""}], "correct_option_index": None}
    if question_type == "true_false":
        return {"correct_option_id": None}
    if question_type == "fill_in_the_blanks":
        return {"correct_answers": [{"text": ""}]}
    if question_type == "short_answer":
        return {"model_answer": None}
    raise FormStateError(f"unknown question type: {question_type}")


class QuestionFormState:
    def __init__(self, question_type: str = "mcq", **shared: Any):
        unknown = set(shared) - set(SHARED_FIELDS)
        if unknown:
            raise FormStateError(f"not a shared form field: {sorted(unknown)}")
        self.shared: Dict[str, Any] = {"difficulty": "medium", "tag_ids": []}
        self.shared.update(shared)
        self.question_type = question_type
        self.variant = _fresh_variant(question_type)

    @classmethod
    def from_question(cls, question: QuestionBase) -> "QuestionFormState":
        """Prefill an edit form from a stored question."""
        shared = {
            field: getattr(question, field)
            for field in SHARED_FIELDS
            if getattr(question, field, None) is not None
        }
        shared["tag_ids"] = list(question.tag_ids)
        question_type = question.question_type if question.question_type in QUESTION_TYPES else "mcq"
        state = cls(question_type, **shared)

        if isinstance(question, MCQQuestion):
            ids = [opt.id for opt in question.options]
            state.variant = {
                "options": [{"text": opt.text} for opt in question.options],
                "correct_option_index": (
                    str(ids.index(question.correct_option_id))
                    if question.correct_option_id in ids else None
                ),
            }
        elif isinstance(question, TrueFalseQuestion):
            state.variant = {"correct_option_id": question.correct_option_id}
        elif isinstance(question, FillInTheBlanksQuestion):
            state.variant = {"correct_answers": [{"text": a} for a in question.correct_answers]}
        elif isinstance(question, ShortAnswerQuestion):
            state.variant = {"model_answer": question.model_answer}
        return state

    # --- type switching ---

    def switch_type(self, question_type: str) -> None:
        if question_type == self.question_type:
            return
        self.variant = _fresh_variant(question_type)
        self.question_type = question_type

    def set(self, field: str, value: Any) -> None:
        if field in SHARED_FIELDS:
            self.shared[field] = value
        elif field in self.variant:
            self.variant[field] = value
        else:
            raise FormStateError(f"{field} is not a field of a {self.question_type} question")

    # --- dynamic lists ---

    def _require(self, question_type: str) -> None:
        if self.question_type != question_type:
            raise FormStateError(f"only {question_type} questions have this list")

    @staticmethod
    def _check_index(index: int, items: list) -> None:
        if not 0 <= index < len(items):
            raise FormStateError(f"no entry at position {index}")

    @property
    def can_add_option(self) -> bool:
        return self.question_type == "mcq" and len(self.variant["options"]) < MAX_OPTIONS

    @property
    def can_remove_option(self) -> bool:
        return self.question_type == "mcq" and len(self.variant["options"]) > MIN_OPTIONS

    def add_option(self, text: str = "") -> None:
        self._require("mcq")
        if not self.can_add_option:
            raise FormStateError(f"at most {MAX_OPTIONS} options")
        self.variant["options"].append({"text": text})

    def remove_option(self, index: int) -> None:
        self._require("mcq")
        if not self.can_remove_option:
            raise FormStateError(f"at least {MIN_OPTIONS} options")
        self._check_index(index, self.variant["options"])
        del self.variant["options"][index]
        selected = self.variant["correct_option_index"]
        if selected is not None:
            selected = int(selected)
            if selected == index:
                self.variant["correct_option_index"] = None
            elif selected > index:
                self.variant["correct_option_index"] = str(selected - 1)

    def set_option_text(self, index: int, text: str) -> None:
        self._require("mcq")
        self.variant["options"][index]["text"] = text

    @property
    def can_remove_answer(self) -> bool:
        return self.question_type == "fill_in_the_blanks" and len(self.variant["correct_answers"]) > MIN_ANSWERS

    def add_answer(self, text: str = "") -> None:
        self._require("fill_in_the_blanks")
        self.variant["correct_answers"].append({"text": text})

    def remove_answer(self, index: int) -> None:
        self._require("fill_in_the_blanks")
        if not self.can_remove_answer:
            raise FormStateError(f"at least {MIN_ANSWERS} answer")
        self._check_index(index, self.variant["correct_answers"])
        del self.variant["correct_answers"][index]

    def set_answer_text(self, index: int, text: str) -> None:
        self._require("fill_in_the_blanks")
        self.variant["correct_answers"][index]["text"] = text

    # --- output ---

    def values(self) -> Dict[str, Any]:
        """Current values as the form schema expects them (snake_case)."""
        data = {"question_type": self.question_type}
        data.update(self.shared)
        for key, value in self.variant.items():
            if isinstance(value, list):
                value = [dict(item) for item in value]
            data[key] = value
        return data

    def validate(self) -> QuestionFormBase:
        """Raises pydantic.ValidationError with per-field messages."""
        return QUESTION_FORM_ADAPTER.validate_python(self.values())


def _option_id(position: int) -> str:
    return f"option-{position}-{uuid.uuid4().hex[:8]}"


def build_question_payload(
    form: QuestionFormBase,
    *,
    overrides: Optional[Dict[str, Any]] = None,
) -> QuestionBase:
    """
    Validated form -> domain question ready for ``add_question``.

    Only shared fields the client actually sent are carried over, so a
    partial update built from this payload leaves the others untouched.
    ``overrides`` pins fields such as subject and lesson for inline forms.
    """
    data: Dict[str, Any] = form.model_dump(include=set(SHARED_FIELDS), exclude_unset=True)
    data.update(overrides or {})
    # set explicitly so exclude_unset dumps still carry the type
    data["question_type"] = form.question_type

    if isinstance(form, MCQForm):
        options: List[Option] = [
            Option(id=_option_id(i + 1), text=opt.text) for i, opt in enumerate(form.options)
        ]
        correct = options[int(form.correct_option_index)].id
        return MCQQuestion(**data, options=options, correct_option_id=correct)
    if isinstance(form, TrueFalseForm):
        return TrueFalseQuestion(
            **data,
            options=true_false_options(),
            correct_option_id=form.correct_option_id,
        )
    if isinstance(form, FillInTheBlanksForm):
        return FillInTheBlanksQuestion(
            **data,
            correct_answers=[answer.text for answer in form.correct_answers],
        )
    if isinstance(form, ShortAnswerForm):
        model_answer = form.model_answer if form.model_answer and form.model_answer.strip() else None
        return ShortAnswerQuestion(**data, model_answer=model_answer)
    raise FormStateError(f"unsupported form: {type(form).__name__}")
