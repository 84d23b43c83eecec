import io
import json
from datetime import datetime, timezone

import pandas as pd
import pytest

from prep_admin.schemas.question import (
    FillInTheBlanksQuestion,
    MCQQuestion,
    Option,
    ShortAnswerQuestion,
    TrueFalseQuestion,
)
from prep_admin.services import export_service, question_listing

SUBJECTS = {"math": "Math", "ar": "Arabic"}
TAGS = {"t-alg": "Algebra", "t-geo": "Geometry"}

CREATED = datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)


@pytest.fixture()
def questions():
    return [
        MCQQuestion(
            id="q1",
            question_text="What is 2+2? (10+ chars)",
            difficulty="easy",
            subject_id="math",
            tag_ids=["t-alg", "t-gone"],
            options=[Option(id="a", text="3"), Option(id="b", text="4")],
            correct_option_id="b",
            created_at=CREATED,
        ),
        ShortAnswerQuestion(
            id="q2",
            question_text="اشرح الفاعل في الجملة",
            subject="Old Arabic",
            model_answer="اسم مرفوع",
        ),
        FillInTheBlanksQuestion(
            id="q3",
            question_text="Area of a square is ___",
            subject_id="math",
            tag_ids=["t-geo"],
            correct_answers=["a^2", "side squared"],
        ),
        TrueFalseQuestion(
            id="q4",
            question_text="الجملة الاسمية تبدأ باسم",
            subject_id="ar",
            correct_option_id="true",
        ),
    ]


def test_grouping_keeps_first_appearance_order(questions):
    groups = question_listing.group_by_subject(questions)

    assert list(groups) == ["math", "uncategorized", "ar"]
    assert [q.id for q in groups["math"]] == ["q1", "q3"]
    assert [q.id for q in groups["uncategorized"]] == ["q2"]


def test_grouped_questions_resolve_subject_names(questions):
    groups = question_listing.grouped_questions(questions, SUBJECTS)

    assert [g.subject_name for g in groups] == ["Math", "Uncategorized", "Arabic"]


@pytest.mark.parametrize("query, expected", [
    ("", ["q1", "q2", "q3", "q4"]),
    ("  ", ["q1", "q2", "q3", "q4"]),
    ("SQUARE", ["q3"]),
    ("math", ["q1", "q3"]),
    ("algebra", ["q1"]),
    ("old arabic", ["q2"]),
    ("الجملة", ["q2", "q4"]),
    ("nothing matches", []),
])
def test_filter_questions(questions, query, expected):
    result = question_listing.filter_questions(questions, query, SUBJECTS, TAGS)

    assert [q.id for q in result] == expected


def test_json_export_keeps_tag_ids(questions):
    selected = [q for q in questions if q.subject_id == "math"]

    records = json.loads(export_service.questions_to_json(selected))

    assert len(records) == 2
    assert records[0]["tagIds"] == ["t-alg", "t-gone"]
    assert records[0]["questionType"] == "mcq"
    assert records[0]["createdAt"].startswith("2024-05-01T10:30:00")
    assert records[1]["correctAnswers"] == ["a^2", "side squared"]


def test_spreadsheet_export_flattens_and_resolves_tags(questions):
    content = export_service.questions_to_xlsx(questions, SUBJECTS, TAGS)

    df = pd.read_excel(io.BytesIO(content), engine="openpyxl")
    assert len(df) == 4
    for column in ("questionText", "subject", "tags", "option1", "option2",
                   "correctOptionText", "correctAnswers", "modelAnswer", "createdAt"):
        assert column in df.columns

    first = df.iloc[0]
    assert first["tags"] == "Algebra, t-gone"
    assert first["subject"] == "Math"
    assert first["option2"] == "4"
    assert first["correctOptionText"] == "4"
    assert df.iloc[1]["subject"] == "Old Arabic"
    assert df.iloc[2]["correctAnswers"] == "a^2 | side squared"
    assert df.iloc[3]["correctOptionText"] == "صحيح"


def test_empty_selection_has_nothing_to_export():
    with pytest.raises(export_service.EmptyExportError):
        export_service.questions_to_json([])
    with pytest.raises(export_service.EmptyExportError):
        export_service.questions_to_xlsx([], SUBJECTS, TAGS)


def test_spreadsheet_columns_keep_their_order_whatever_comes_first(questions):
    short_first = [questions[1], questions[0]]

    content = export_service.questions_to_xlsx(short_first, SUBJECTS, TAGS)

    df = pd.read_excel(io.BytesIO(content), engine="openpyxl")
    assert list(df.columns) == export_service.spreadsheet_columns(2)
    assert list(df.columns).index("option2") < list(df.columns).index("correctOptionText")
    assert df.columns[-1] == "updatedAt"
