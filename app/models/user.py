from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from app.db.base import Base

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), index=True)
    email = Column(String(100), unique=True, index=True, nullable=False)
    password = Column(String(150), nullable=False)
    role = Column(String(20), nullable=False, default="CLIENT")  # 'ADMIN', 'USER', 'CLIENT'
    # Optional link to the Client record this account represents
    client_id = Column(Integer, ForeignKey("clients.id", use_alter=True, name="fk_users_client_id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    client = relationship("Client", foreign_keys=[client_id], post_update=True)

    @property
    def is_admin(self):
        return self.role == "ADMIN"
