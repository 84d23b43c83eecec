# prep_admin/schemas/question.py
from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter, field_validator, model_validator

from prep_admin.schemas.common import CamelModel

Difficulty = Literal["easy", "medium", "hard"]
QuestionType = Literal["mcq", "true_false", "fill_in_the_blanks", "short_answer"]

QUESTION_TYPES = ("mcq", "true_false", "fill_in_the_blanks", "short_answer")


class Option(CamelModel):
    id: str
    text: str


def true_false_options() -> List[Option]:
    return [Option(id="true", text="صحيح"), Option(id="false", text="خطأ")]


class QuestionBase(CamelModel):
    """
    Fields every question carries.

    Also used on its own for rows whose question_type is unknown, so that a
    single bad row does not break a listing.
    """
    id: Optional[str] = None
    question_type: Optional[str] = None
    question_text: str
    difficulty: Difficulty = "medium"

    subject_id: Optional[str] = None
    subject: Optional[str] = None  # denormalized subject name
    lesson_id: Optional[str] = None

    image: Optional[str] = None
    image_hint: Optional[str] = None
    tag_ids: List[str] = Field(default_factory=list)

    is_sane: Optional[bool] = None
    sanity_explanation: Optional[str] = None
    is_locked: bool = True

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MCQQuestion(QuestionBase):
    question_type: Literal["mcq"] = "mcq"
    options: List[Option]
    correct_option_id: str

    @model_validator(mode="after")
    def _correct_option_is_listed(self):
        matches = [opt for opt in self.options if opt.id == self.correct_option_id]
        if len(matches) != 1:
            raise ValueError("correctOptionId must match exactly one option id")
        return self


class TrueFalseQuestion(QuestionBase):
    question_type: Literal["true_false"] = "true_false"
    options: List[Option] = Field(default_factory=true_false_options)
    correct_option_id: Literal["true", "false"]

    @field_validator("options")
    @classmethod
    def _fixed_pair(cls, v):
        # stored labels are ignored: the pair is always true/false
        return true_false_options()


class FillInTheBlanksQuestion(QuestionBase):
    question_type: Literal["fill_in_the_blanks"] = "fill_in_the_blanks"
    correct_answers: List[str] = Field(min_length=1)


class ShortAnswerQuestion(QuestionBase):
    question_type: Literal["short_answer"] = "short_answer"
    model_answer: Optional[str] = None


Question = Annotated[
    Union[MCQQuestion, TrueFalseQuestion, FillInTheBlanksQuestion, ShortAnswerQuestion],
    Field(discriminator="question_type"),
]

# what the read path can return: a known variant, or the bare base shape
QuestionRead = Union[Question, QuestionBase]

QUESTION_ADAPTER = TypeAdapter(Question)


class QuestionUpdate(CamelModel):
    """Partial update; only the fields that were sent are written."""
    question_type: Optional[QuestionType] = None
    question_text: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    subject_id: Optional[str] = None
    subject: Optional[str] = None
    lesson_id: Optional[str] = None
    image: Optional[str] = None
    image_hint: Optional[str] = None
    tag_ids: Optional[List[str]] = None
    is_sane: Optional[bool] = None
    sanity_explanation: Optional[str] = None
    is_locked: Optional[bool] = None

    options: Optional[List[Option]] = None
    correct_option_id: Optional[str] = None
    correct_answers: Optional[List[str]] = None
    model_answer: Optional[str] = None

    @field_validator("question_type", "question_text", "difficulty", "is_locked")
    @classmethod
    def _not_null(cls, v):
        # optional means "may be omitted", these columns are never null
        if v is None:
            raise ValueError("may not be null")
        return v


class QuestionTagsUpdate(CamelModel):
    """Tag dialog payload: existing tag ids plus free names to match or create."""
    tag_ids: List[str] = Field(default_factory=list)
    new_tag_names: List[str] = Field(default_factory=list)


class QuestionGroup(CamelModel):
    subject_id: str
    subject_name: str
    questions: List[QuestionRead]
