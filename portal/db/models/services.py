import uuid
from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Service(Base):
    __tablename__ = 'service'
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    firm_id = Column('firmId', String(36), nullable=True)
    client_id = Column('clientId', String(36), ForeignKey('client.id'), nullable=True)
    project_manager_id = Column('projectManagerId', String(36), nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(50), nullable=False, default='OTHER')
    status = Column(String(50), nullable=False, default='PENDING')
    origin = Column(String(50), nullable=False, default='FIRM_CREATED')
    financial_year = Column('financialYear', String(20), nullable=True)
    assessment_year = Column('assessmentYear', String(20), nullable=True)
    due_date = Column('dueDate', DateTime(timezone=True), nullable=True)
    completed_at = Column('completedAt', DateTime(timezone=True), nullable=True)
    fee_amount = Column('feeAmount', Float, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column('createdAt', DateTime(timezone=True), default=now_utc)
    updated_at = Column('updatedAt', DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    client = relationship("Client", back_populates="services")

    __table_args__ = (
        Index('idx_service_status', 'status'),
    )
