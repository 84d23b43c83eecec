# prep_admin/models/profile.py
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from sqlalchemy.sql import func
from prep_admin.db.base import Base, generate_id


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), nullable=True, unique=True, index=True)
    name = Column(String(100), nullable=True)
    # 'admin' / 'teacher' / 'student'
    role = Column(String(20), nullable=True, index=True)

    avatar_url = Column(Text, nullable=True)
    avatar_hint = Column(String(100), nullable=True)

    points = Column(Integer, nullable=False, default=0)
    level = Column(Integer, nullable=False, default=1)
    progress_to_next_level = Column(Integer, nullable=False, default=0)
    badges = Column(JSON, nullable=True)
    rewards = Column(JSON, nullable=True)

    student_goals = Column(Text, nullable=True)
    branch = Column(String(20), nullable=True, default="undetermined")
    university = Column(String(255), nullable=True)
    major = Column(String(255), nullable=True)
    active_subscription = Column(JSON, nullable=True)

    youtube_channel_url = Column(Text, nullable=True)
    subjects_taught_ids = Column(String(36), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
