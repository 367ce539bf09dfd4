"""Database models."""

# Import order matters: Company's relationships reference CompanyDocument by name
from company_review.models.company import Company, CompanyLocation
from company_review.models.company_document import (
    CompanyDocument,
    DocumentType,
    DocumentVerificationStatus,
)

# Export all models
__all__ = [
    "Company",
    "CompanyLocation",
    "CompanyDocument",
    "DocumentType",
    "DocumentVerificationStatus",
]
