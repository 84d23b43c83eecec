# prep_admin/schemas/question_form.py
"""
Submission schema for the question forms (new, edit, add-to-lesson).

One tagged union on ``questionType``: the shared base carries subject, text,
image, difficulty and tags; each variant adds its own fields and rules.
Errors come back per field through the usual 422 response.
"""
from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field, HttpUrl, TypeAdapter, ValidationError, field_validator, model_validator

from prep_admin.schemas.common import CamelModel
from prep_admin.schemas.question import Difficulty

MIN_QUESTION_TEXT = 10
MAX_IMAGE_HINT = 50
MIN_OPTIONS = 2
MAX_OPTIONS = 6
MIN_ANSWERS = 1

_URL_ADAPTER = TypeAdapter(HttpUrl)


class OptionInput(CamelModel):
    text: str = Field(min_length=1)


class AnswerInput(CamelModel):
    text: str = Field(min_length=1)


class QuestionFormBase(CamelModel):
    subject_id: str
    question_text: str = Field(min_length=MIN_QUESTION_TEXT)
    difficulty: Difficulty
    image: Optional[str] = None
    image_hint: Optional[str] = Field(default=None, max_length=MAX_IMAGE_HINT)
    tag_ids: List[str] = Field(default_factory=list)
    lesson_id: Optional[str] = None
    is_sane: Optional[bool] = None
    sanity_explanation: Optional[str] = None

    @field_validator("subject_id")
    @classmethod
    def _subject_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("subject is required")
        return v

    @field_validator("image")
    @classmethod
    def _url_or_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v.strip() == "":
            return None
        try:
            _URL_ADAPTER.validate_python(v)
        except ValidationError:
            raise ValueError("image must be a valid URL")
        return v


class MCQForm(QuestionFormBase):
    question_type: Literal["mcq"]
    options: List[OptionInput] = Field(min_length=MIN_OPTIONS, max_length=MAX_OPTIONS)
    correct_option_index: str

    @model_validator(mode="after")
    def _index_selects_an_option(self):
        try:
            index = int(self.correct_option_index)
        except (TypeError, ValueError):
            raise ValueError("select the correct option")
        if index < 0 or index >= len(self.options):
            raise ValueError("select the correct option")
        return self


class TrueFalseForm(QuestionFormBase):
    question_type: Literal["true_false"]
    correct_option_id: Literal["true", "false"]


class FillInTheBlanksForm(QuestionFormBase):
    question_type: Literal["fill_in_the_blanks"]
    correct_answers: List[AnswerInput] = Field(min_length=MIN_ANSWERS)


class ShortAnswerForm(QuestionFormBase):
    question_type: Literal["short_answer"]
    model_answer: Optional[str] = None


QuestionForm = Annotated[
    Union[MCQForm, TrueFalseForm, FillInTheBlanksForm, ShortAnswerForm],
    Field(discriminator="question_type"),
]

QUESTION_FORM_ADAPTER = TypeAdapter(QuestionForm)

