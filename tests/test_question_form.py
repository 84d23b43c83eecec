import pytest
from pydantic import ValidationError

from prep_admin.schemas.question import MCQQuestion, Option, ShortAnswerQuestion, TrueFalseQuestion
from prep_admin.schemas.question_form import QUESTION_FORM_ADAPTER
from prep_admin.services.question_form import (
    FormStateError,
    QuestionFormState,
    build_question_payload,
)

MCQ_INPUT = {
    "questionType": "mcq",
    "subjectId": "s1",
    "questionText": "What is 2+2? (10+ chars)",
    "difficulty": "easy",
    "options": [{"text": "3"}, {"text": "4"}],
    "correctOptionIndex": "1",
}


def _error_fields(exc_info):
    return {loc for err in exc_info.value.errors() for loc in err["loc"]}


def test_create_mcq_generates_option_ids():
    form = QUESTION_FORM_ADAPTER.validate_python(MCQ_INPUT)

    question = build_question_payload(form)

    assert isinstance(question, MCQQuestion)
    assert len(question.options) == 2
    assert question.options[0].id != question.options[1].id
    assert question.options[0].id.startswith("option-1-")
    assert question.correct_option_id == question.options[1].id
    assert question.subject_id == "s1"


def test_true_false_payload_gets_the_fixed_pair():
    form = QUESTION_FORM_ADAPTER.validate_python({
        "questionType": "true_false",
        "subjectId": "s1",
        "questionText": "الشمس تشرق من الشرق",
        "difficulty": "easy",
        "correctOptionId": "true",
    })

    question = build_question_payload(form)

    assert isinstance(question, TrueFalseQuestion)
    assert [opt.id for opt in question.options] == ["true", "false"]


def test_blank_model_answer_is_stored_as_null():
    form = QUESTION_FORM_ADAPTER.validate_python({
        "questionType": "short_answer",
        "subjectId": "s1",
        "questionText": "اشرح دورة الماء في الطبيعة",
        "difficulty": "hard",
        "modelAnswer": "   ",
        "image": "",
    })

    question = build_question_payload(form, overrides={"subject": "Science"})

    assert isinstance(question, ShortAnswerQuestion)
    assert question.model_answer is None
    assert question.image is None
    assert question.subject == "Science"


@pytest.mark.parametrize("changes, field", [
    ({"questionText": "short"}, "questionText"),
    ({"subjectId": " "}, "subjectId"),
    ({"image": "not a url"}, "image"),
    ({"imageHint": "x" * 51}, "imageHint"),
    ({"options": [{"text": "only one"}]}, "options"),
    ({"options": [{"text": ""}, {"text": "4"}]}, "text"),
])
def test_form_reports_field_errors(changes, field):
    with pytest.raises(ValidationError) as exc_info:
        QUESTION_FORM_ADAPTER.validate_python({**MCQ_INPUT, **changes})

    assert field in _error_fields(exc_info)


@pytest.mark.parametrize("index", [None, "2", "-1", "abc"])
def test_mcq_index_must_select_an_option(index):
    with pytest.raises(ValidationError) as exc_info:
        QUESTION_FORM_ADAPTER.validate_python({**MCQ_INPUT, "correctOptionIndex": index})

    assert "select the correct option" in str(exc_info.value) or "correctOptionIndex" in _error_fields(exc_info)


def test_fill_in_the_blanks_requires_an_answer():
    with pytest.raises(ValidationError):
        QUESTION_FORM_ADAPTER.validate_python({
            "questionType": "fill_in_the_blanks",
            "subjectId": "s1",
            "questionText": "عاصمة مصر هي ___",
            "difficulty": "medium",
            "correctAnswers": [],
        })


def test_switching_type_drops_the_old_variant_state():
    state = QuestionFormState(
        "mcq", subject_id="s1", question_text="What is 2+2? (10+ chars)", difficulty="easy"
    )
    state.set_option_text(0, "3")
    state.set_option_text(1, "4")
    state.set("correct_option_index", "1")

    state.switch_type("true_false")

    values = state.values()
    assert "options" not in values
    assert "correct_option_index" not in values
    assert values["question_type"] == "true_false"
    assert values["question_text"] == "What is 2+2? (10+ chars)"

    state.switch_type("mcq")

    assert state.variant == {"options": [{"text": ""}, {"text": ""}], "correct_option_index": None}
    with pytest.raises(ValidationError):
        state.validate()


def test_fields_of_another_type_cannot_be_set():
    state = QuestionFormState("true_false")

    with pytest.raises(FormStateError):
        state.set("options", [{"text": "a"}])
    with pytest.raises(FormStateError):
        state.add_option()


def test_option_list_bounds():
    state = QuestionFormState("mcq")

    assert not state.can_remove_option
    with pytest.raises(FormStateError):
        state.remove_option(0)

    for _ in range(4):
        state.add_option()

    assert len(state.variant["options"]) == 6
    assert not state.can_add_option
    with pytest.raises(FormStateError):
        state.add_option()


def test_removing_an_option_keeps_the_selected_one():
    state = QuestionFormState("mcq")
    state.add_option("c")
    state.add_option("d")
    state.set("correct_option_index", "2")

    state.remove_option(0)
    assert state.variant["correct_option_index"] == "1"

    state.remove_option(1)
    assert state.variant["correct_option_index"] is None


def test_answer_list_keeps_one_entry():
    state = QuestionFormState("fill_in_the_blanks")

    assert not state.can_remove_answer
    with pytest.raises(FormStateError):
        state.remove_answer(0)

    state.add_answer("Cairo")
    assert state.can_remove_answer
    state.remove_answer(0)
    assert state.variant["correct_answers"] == [{"text": "Cairo"}]


def test_state_validates_into_a_payload():
    state = QuestionFormState(
        "fill_in_the_blanks",
        subject_id="s1",
        question_text="عاصمة مصر هي ___",
        difficulty="medium",
    )
    state.set_answer_text(0, "القاهرة")

    question = build_question_payload(state.validate())

    assert question.correct_answers == ["القاهرة"]


def test_edit_form_is_prefilled_from_a_question():
    question = MCQQuestion(
        id="q1",
        question_text="What is 2+2? (10+ chars)",
        difficulty="easy",
        subject_id="s1",
        tag_ids=["t1"],
        options=[Option(id="a", text="3"), Option(id="b", text="4")],
        correct_option_id="b",
    )

    state = QuestionFormState.from_question(question)

    assert state.question_type == "mcq"
    assert state.variant["options"] == [{"text": "3"}, {"text": "4"}]
    assert state.variant["correct_option_index"] == "1"
    assert state.shared["tag_ids"] == ["t1"]
    assert state.validate().correct_option_index == "1"


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_removing_an_option_outside_the_list_is_rejected(index):
    state = QuestionFormState("mcq")
    state.add_option("c")
    state.set("correct_option_index", "2")

    with pytest.raises(FormStateError):
        state.remove_option(index)

    assert len(state.variant["options"]) == 3
    assert state.variant["correct_option_index"] == "2"


def test_removing_an_answer_outside_the_list_is_rejected():
    state = QuestionFormState("fill_in_the_blanks")
    state.add_answer("Cairo")

    with pytest.raises(FormStateError):
        state.remove_answer(-1)

    assert len(state.variant["correct_answers"]) == 2
