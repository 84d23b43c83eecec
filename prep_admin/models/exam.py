# prep_admin/models/exam.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from prep_admin.db.base import Base, generate_id


class Exam(Base):
    __tablename__ = "exams"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    subject_id = Column(String(36), ForeignKey("subjects.id", ondelete="SET NULL"), nullable=True, index=True)
    published = Column(Boolean, nullable=False, default=False)

    image = Column(Text, nullable=True)
    image_hint = Column(String(100), nullable=True)
    teacher_name = Column(String(255), nullable=True)
    teacher_id = Column(String(36), nullable=True)
    # minutes
    duration = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )


class ExamQuestion(Base):
    __tablename__ = "exam_questions"

    exam_id = Column(String(36), ForeignKey("exams.id", ondelete="CASCADE"), primary_key=True)
    question_id = Column(String(36), ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True)
    order_number = Column(Integer, nullable=True)
    points = Column(Integer, nullable=False, default=1)
