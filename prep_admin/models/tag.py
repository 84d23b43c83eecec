# prep_admin/models/tag.py
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from prep_admin.db.base import Base, generate_id


class Tag(Base):
    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
