from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from prep_admin.models.question import Question
from prep_admin.schemas.question import (
    FillInTheBlanksQuestion,
    MCQQuestion,
    Option,
    QuestionBase,
    ShortAnswerQuestion,
    TrueFalseQuestion,
)
from prep_admin.services import question_service
from prep_admin.services.question_service import VARIANT_COLUMNS, question_to_row, row_to_question


def _row_object(question):
    row = question_to_row(question.model_dump())
    return SimpleNamespace(id=question.id, created_at=None, updated_at=None, **row)


SAMPLES = [
    MCQQuestion(
        id="q-mcq",
        question_text="ما هو ناتج 2+2؟",
        difficulty="easy",
        subject_id="s1",
        subject="Math",
        tag_ids=["t1", "t2"],
        options=[Option(id="a", text="3"), Option(id="b", text="4")],
        correct_option_id="b",
    ),
    TrueFalseQuestion(
        id="q-tf",
        question_text="الأرض كروية الشكل",
        difficulty="medium",
        lesson_id="l1",
        correct_option_id="true",
        is_sane=True,
        sanity_explanation="ok",
    ),
    FillInTheBlanksQuestion(
        id="q-fill",
        question_text="عاصمة فرنسا هي ___",
        difficulty="hard",
        correct_answers=["باريس", "Paris"],
        image="https://example.com/paris.png",
        image_hint="eiffel tower",
    ),
    ShortAnswerQuestion(
        id="q-short",
        question_text="اشرح قانون نيوتن الأول",
        model_answer="الجسم الساكن يبقى ساكنا",
        is_locked=False,
    ),
]


@pytest.mark.parametrize("question", SAMPLES, ids=lambda q: q.question_type)
def test_round_trip_keeps_every_variant_field(question):
    restored = row_to_question(_row_object(question))

    assert type(restored) is type(question)
    assert restored.model_dump() == question.model_dump()


def test_row_only_carries_active_variant_columns():
    row = question_to_row(SAMPLES[3].model_dump())

    assert row["model_answer"] == "الجسم الساكن يبقى ساكنا"
    for column in ("options", "correct_option_id", "correct_answers"):
        assert row[column] is None
    assert set(VARIANT_COLUMNS) <= set(row)


def test_row_uses_snake_case_columns_and_blank_ids_become_null():
    row = question_to_row({
        "question_type": "short_answer",
        "question_text": "سؤال قصير للاختبار",
        "difficulty": "easy",
        "subject_id": "  ",
        "image_hint": "hint",
    })

    assert row["subject_id"] is None
    assert row["image_hint"] == "hint"
    assert row["tag_ids"] == []
    assert row["is_locked"] is True
    assert "id" not in row
    assert "created_at" not in row


def test_mcq_correct_option_must_match_exactly_one_option():
    with pytest.raises(ValidationError):
        MCQQuestion(
            question_text="Pick the right one please",
            options=[Option(id="a", text="1"), Option(id="b", text="2")],
            correct_option_id="c",
        )
    with pytest.raises(ValidationError):
        MCQQuestion(
            question_text="Pick the right one please",
            options=[Option(id="a", text="1"), Option(id="a", text="2")],
            correct_option_id="a",
        )


def test_true_false_options_are_always_the_fixed_pair():
    q = TrueFalseQuestion(
        question_text="Water boils at 100C",
        options=[Option(id="x", text="yes"), Option(id="y", text="no")],
        correct_option_id="false",
    )

    assert [opt.id for opt in q.options] == ["true", "false"]
    with pytest.raises(ValidationError):
        TrueFalseQuestion(question_text="Water boils at 100C", correct_option_id="maybe")


def test_fill_in_the_blanks_needs_an_answer():
    with pytest.raises(ValidationError):
        FillInTheBlanksQuestion(question_text="The capital is ___", correct_answers=[])


def test_legacy_row_defaults():
    row = SimpleNamespace(
        id="legacy",
        question_type="true_false",
        question_text="سؤال قديم بدون خيارات",
        difficulty="medium",
        subject_id=None,
        subject="Physics",
        lesson_id=None,
        image=None,
        image_hint=None,
        tag_ids=None,
        is_sane=None,
        sanity_explanation=None,
        is_locked=True,
        options=None,
        correct_option_id="true",
        correct_answers=None,
        model_answer=None,
        created_at=None,
        updated_at=None,
    )

    q = row_to_question(row)

    assert isinstance(q, TrueFalseQuestion)
    assert q.tag_ids == []
    assert [opt.id for opt in q.options] == ["true", "false"]


def test_row_without_id_is_skipped():
    assert row_to_question(None) is None
    assert row_to_question(SimpleNamespace(id=None)) is None


def test_unknown_type_degrades_to_base_shape(db_session):
    db_session.add(Question(id="odd", question_type="essay", question_text="Write an essay about spring"))
    db_session.commit()

    q = question_service.get_question_by_id(db_session, "odd")

    assert type(q) is QuestionBase
    assert q.question_type == "essay"
    assert q.tag_ids == []


def test_broken_variant_row_degrades_to_base_shape(db_session):
    db_session.add(Question(
        id="broken",
        question_type="mcq",
        question_text="MCQ row without options",
        correct_option_id="a",
    ))
    db_session.commit()

    q = question_service.get_question_by_id(db_session, "broken")

    assert type(q) is QuestionBase


def test_partial_update_resolves_variant_against_stored_type(db_session):
    created = question_service.add_question(db_session, data=SAMPLES[1].model_dump(exclude={"id"}))
    db_obj = question_service.get_question_row(db_session, created.id)

    updated = question_service.update_question(
        db_session, db_obj=db_obj, data={"correct_option_id": "false"}
    )

    assert isinstance(updated, TrueFalseQuestion)
    assert updated.correct_option_id == "false"
    assert updated.question_text == SAMPLES[1].question_text
    assert updated.lesson_id == "l1"


def test_changing_type_clears_old_variant_columns(db_session):
    created = question_service.add_question(db_session, data=SAMPLES[0].model_dump(exclude={"id"}))
    db_obj = question_service.get_question_row(db_session, created.id)

    updated = question_service.update_question(
        db_session,
        db_obj=db_obj,
        data={"question_type": "fill_in_the_blanks", "correct_answers": ["4"]},
    )

    assert isinstance(updated, FillInTheBlanksQuestion)
    assert db_obj.options is None
    assert db_obj.correct_option_id is None
    assert updated.tag_ids == ["t1", "t2"]


def test_lesson_questions_are_listed_oldest_first(db_session):
    first = question_service.add_question(db_session, data=SAMPLES[1].model_dump(exclude={"id"}))
    question_service.add_question(db_session, data=SAMPLES[3].model_dump(exclude={"id"}))

    questions = question_service.list_questions_for_lesson(db_session, "l1")

    assert [q.id for q in questions] == [first.id]


def test_invalid_update_writes_nothing(db_session):
    created = question_service.add_question(db_session, data=SAMPLES[0].model_dump(exclude={"id"}))
    db_obj = question_service.get_question_row(db_session, created.id)

    with pytest.raises(question_service.InvalidQuestionError):
        question_service.update_question(db_session, db_obj=db_obj, data={"correct_option_id": "c"})
    with pytest.raises(question_service.InvalidQuestionError):
        question_service.update_question(
            db_session, db_obj=db_obj, data={"question_type": "fill_in_the_blanks", "correct_answers": []}
        )

    db_session.expire_all()
    stored = question_service.get_question_by_id(db_session, created.id)
    assert isinstance(stored, MCQQuestion)
    assert stored.correct_option_id == "b"
