from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from app.db.base import Base


class ErrorLog(Base):
    """
    Unclassified backend failures (database or unexpected errors).

    Written by the 500 handler together with the Sentry event id so the
    two can be correlated. Admins mark entries resolved.
    """
    __tablename__ = "error_logs"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # Error details
    error_type = Column(String(100), nullable=False)  # Exception class name
    error_message = Column(Text, nullable=False)
    stack_trace = Column(Text, nullable=True)

    # Request context
    endpoint = Column(String(255), nullable=True)
    method = Column(String(10), nullable=True)
    request_id = Column(String(36), nullable=True, index=True)

    sentry_event_id = Column(String(36), nullable=True, index=True)
    ip_address = Column(String(45), nullable=True)

    severity = Column(String(20), nullable=True, default="error")
    resolved = Column(Boolean, default=False, index=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    resolved_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)

    user = relationship("User", foreign_keys=[user_id])
    resolver = relationship("User", foreign_keys=[resolved_by])

    def __repr__(self):
        return f"<ErrorLog(id={self.id}, type='{self.error_type}', severity='{self.severity}', resolved={self.resolved})>"
