# prep_admin/models/question.py
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from prep_admin.db.base import Base, generate_id


class Question(Base):
    __tablename__ = "questions"

    id = Column(String(36), primary_key=True, default=generate_id)

    # mcq / true_false / fill_in_the_blanks / short_answer
    question_type = Column(String(30), nullable=True, index=True)
    question_text = Column(Text, nullable=False)
    difficulty = Column(String(10), nullable=False, default="medium")

    subject_id = Column(String(36), ForeignKey("subjects.id", ondelete="SET NULL"), nullable=True, index=True)
    # denormalized subject name, the only subject reference on legacy rows
    subject = Column(String(255), nullable=True)
    # no FK: deleting a lesson leaves its questions in place
    lesson_id = Column(String(36), nullable=True, index=True)

    image = Column(Text, nullable=True)
    image_hint = Column(String(100), nullable=True)
    tag_ids = Column(JSON, nullable=True)

    # variant columns, null when not used by question_type
    options = Column(JSON, nullable=True)
    correct_option_id = Column(String(100), nullable=True)
    correct_answers = Column(JSON, nullable=True)
    model_answer = Column(Text, nullable=True)

    is_sane = Column(Boolean, nullable=True)
    sanity_explanation = Column(Text, nullable=True)
    is_locked = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
