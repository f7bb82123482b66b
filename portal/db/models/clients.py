import uuid
from sqlalchemy import Boolean, Column, DateTime, Index, String
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Client(Base):
    __tablename__ = 'client'
    # Column names follow the external schema (camelCase)
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    firm_id = Column('firmId', String(36), nullable=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    is_active = Column('isActive', Boolean, nullable=False, default=True)
    created_at = Column('createdAt', DateTime(timezone=True), default=now_utc)
    updated_at = Column('updatedAt', DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    services = relationship("Service", back_populates="client")

    __table_args__ = (
        Index('idx_client_email', 'email'),
    )
