"""
Company Document Model
Compliance files uploaded by employers; the upload service resolves the URL
"""
import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from company_review.db.base import Base, utcnow


class DocumentType(str, enum.Enum):
    """Document categories an employer can upload."""
    BUSINESS_LICENSE = "BUSINESS_LICENSE"
    COMPANY_REGISTRATION = "COMPANY_REGISTRATION"
    ID_DOCUMENT = "ID_DOCUMENT"
    COMPANY_LOGO = "COMPANY_LOGO"


class DocumentVerificationStatus(str, enum.Enum):
    """Per-document review status (set by document-level review)."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    REQUIRES_RESUBMISSION = "REQUIRES_RESUBMISSION"


class CompanyDocument(Base):
    __tablename__ = "company_documents"

    company_id = Column(
        UUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    document_type = Column(
        Enum(DocumentType, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    original_name = Column(String(255), nullable=False)
    url = Column(String(1000), nullable=False)
    uploaded_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    verification_status = Column(
        Enum(DocumentVerificationStatus, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        default=DocumentVerificationStatus.PENDING,
        nullable=False,
    )
    verification_notes = Column(Text, nullable=True)  # Reviewer notes

    company = relationship("Company", back_populates="documents")

    def __repr__(self):
        return f"<CompanyDocument {self.document_type.value} ({self.verification_status.value})>"
