# prep_admin/models/subject.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from prep_admin.db.base import Base, generate_id


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # scientific / literary / general
    branch = Column(String(20), nullable=False)
    image = Column(Text, nullable=True)
    icon_name = Column(String(100), nullable=True)
    image_hint = Column(String(100), nullable=True)
    order = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )


class SubjectSection(Base):
    __tablename__ = "subject_sections"

    id = Column(String(36), primary_key=True, default=generate_id)
    subject_id = Column(String(36), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    # theory / practical
    type = Column(String(20), nullable=False)
    order = Column(Integer, nullable=True)
    is_locked = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )


class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(String(36), primary_key=True, default=generate_id)
    subject_id = Column(String(36), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)
    section_id = Column(String(36), ForeignKey("subject_sections.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    video_url = Column(Text, nullable=True)
    content = Column(Text, nullable=True)

    # [{name, youtube_channel_url}]
    teachers = Column(JSON, nullable=True)
    # [{name, url, type}]
    files = Column(JSON, nullable=True)
    linked_exam_ids = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)

    order = Column(Integer, nullable=True)
    is_locked = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
