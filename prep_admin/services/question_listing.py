# prep_admin/services/question_listing.py
from typing import Dict, List, Mapping, Optional, Sequence

from prep_admin.schemas.question import QuestionBase, QuestionGroup

UNCATEGORIZED = "uncategorized"
UNCATEGORIZED_LABEL = "Uncategorized"


def group_by_subject(questions: Sequence[QuestionBase]) -> Dict[str, List[QuestionBase]]:
    """
    Bucket questions by subject id, in order of first appearance. Questions
    without a subject id land in the ``uncategorized`` bucket.
    """
    groups: Dict[str, List[QuestionBase]] = {}
    for q in questions:
        groups.setdefault(q.subject_id or UNCATEGORIZED, []).append(q)
    return groups


def subject_label(
    subject_id: str,
    questions: Sequence[QuestionBase],
    subject_names: Mapping[str, str],
) -> str:
    if subject_id == UNCATEGORIZED:
        return UNCATEGORIZED_LABEL
    if subject_id in subject_names:
        return subject_names[subject_id]
    # legacy rows only know the subject by name
    for q in questions:
        if q.subject:
            return q.subject
    return subject_id


def grouped_questions(
    questions: Sequence[QuestionBase],
    subject_names: Mapping[str, str],
) -> List[QuestionGroup]:
    return [
        QuestionGroup(
            subject_id=subject_id,
            subject_name=subject_label(subject_id, bucket, subject_names),
            questions=bucket,
        )
        for subject_id, bucket in group_by_subject(questions).items()
    ]


def filter_questions(
    questions: Sequence[QuestionBase],
    query: Optional[str],
    subject_names: Mapping[str, str],
    tag_names: Mapping[str, str],
) -> List[QuestionBase]:
    """
    Case-insensitive substring match on the question text, the subject name
    or any of the question's tag names. A blank query keeps everything.
    """
    needle = (query or "").strip().casefold()
    if not needle:
        return list(questions)

    result = []
    for q in questions:
        haystack = [q.question_text or ""]
        haystack.append(subject_names.get(q.subject_id or "", q.subject or ""))
        haystack.extend(tag_names.get(tag_id, "") for tag_id in q.tag_ids)
        if any(needle in text.casefold() for text in haystack if text):
            result.append(q)
    return result
