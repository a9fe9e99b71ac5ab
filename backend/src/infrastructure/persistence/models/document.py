"""
Document ORM Model
Generic JSON document row; one table serves every collection
"""
from sqlalchemy import Column, String, DateTime, JSON, UniqueConstraint

from core.database import Base


class DocumentModel(Base):
    """Documents table ORM model"""

    __tablename__ = "documents"

    # Primary Key
    id = Column(String(32), primary_key=True)

    # Owning collection ("jobs", "job_seekers", "matches")
    collection = Column(String(100), nullable=False, index=True)

    # Document body
    data = Column(JSON, nullable=False, default=dict)

    # Serialized values of the fields a create() asked to keep unique
    unique_key = Column(String(512), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    # Constraints
    __table_args__ = (
        UniqueConstraint('collection', 'unique_key', name='uq_documents_collection_unique_key'),
    )

    def __repr__(self):
        return f"<DocumentModel {self.collection}/{self.id}>"
