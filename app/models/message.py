"""
Direct message model
"""
from sqlalchemy import Column, Integer, Boolean, DateTime, Text, ForeignKey
from app.database import Base
from app.utils.time_utils import utc_now


class Message(Base):
    """Direct message between two friends"""
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False, default="")
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utc_now)
