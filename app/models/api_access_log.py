from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, BigInteger, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from app.db.base import Base


class APIAccessLog(Base):
    """
    One row per API request, written by AccessLoggingMiddleware.

    Stores the acting user (from the session cookie), timing and
    request/response metadata. Request bodies are only kept as a hash.
    """
    __tablename__ = "api_access_logs"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    user_role = Column(String(20), nullable=True)

    # Request information
    endpoint = Column(String(255), nullable=False, index=True)
    method = Column(String(10), nullable=False)
    status_code = Column(Integer, nullable=False)

    ip_address = Column(String(45), nullable=True)  # IPv6 compatible
    user_agent = Column(Text, nullable=True)

    request_id = Column(String(36), nullable=True, unique=True, index=True)
    duration_ms = Column(Integer, nullable=True)

    request_body_hash = Column(String(64), nullable=True)  # SHA256
    response_size = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)

    user = relationship("User", foreign_keys=[user_id])

    def __repr__(self):
        return f"<APIAccessLog(id={self.id}, endpoint='{self.endpoint}', method='{self.method}', status={self.status_code})>"
