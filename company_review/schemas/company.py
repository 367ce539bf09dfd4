"""Company verification schemas for API requests and responses."""

import math
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from company_review.config import settings
from company_review.models.company_document import DocumentType, DocumentVerificationStatus


def _str_id(value: Any) -> Any:
    return str(value) if isinstance(value, UUID) else value


# ==================== Companies ====================

class OwnerBrief(BaseModel):
    """Company owner (account service user)."""
    name: Optional[str] = None
    email: Optional[str] = None


class CompanyLocationResponse(BaseModel):
    """Company address record."""
    address: Optional[str] = None
    city: str
    state: Optional[str] = None
    country: str
    zip_code: Optional[str] = None
    is_headquarters: bool = False

    model_config = ConfigDict(from_attributes=True)


class CompanyResponse(BaseModel):
    """Company as shown to reviewers."""
    id: str
    name: str
    industry: str
    size: str
    founded_year: Optional[int] = None
    website: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[str] = None
    owner: Optional[OwnerBrief] = None
    locations: List[CompanyLocationResponse] = Field(default_factory=list)
    is_verified: bool = False
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode='before')
    @classmethod
    def convert_orm_fields(cls, data: Any) -> Any:
        """Flatten SQLAlchemy Company objects.

        The ORM row keeps the owner as separate columns and the id as a UUID;
        both are reshaped here so the same schema serves ORM and dict input.
        """
        if hasattr(data, '__table__'):  # SQLAlchemy Company object
            # locations is selectin-loaded, so this never triggers async IO
            return {
                'id': str(data.id),
                'name': data.name,
                'industry': data.industry,
                'size': data.size,
                'founded_year': data.founded_year,
                'website': data.website,
                'description': data.description,
                'logo': data.logo,
                'owner': (
                    {'name': data.owner_name, 'email': data.owner_email}
                    if data.owner_name or data.owner_email else None
                ),
                'locations': [
                    {
                        'address': loc.address,
                        'city': loc.city,
                        'state': loc.state,
                        'country': loc.country,
                        'zip_code': loc.zip_code,
                        'is_headquarters': bool(loc.is_headquarters),
                    }
                    for loc in (data.locations or [])
                ],
                'is_verified': bool(data.is_verified),
                'created_at': data.created_at,
            }
        if isinstance(data, dict) and isinstance(data.get('id'), UUID):
            data = data.copy()
            data['id'] = str(data['id'])
        return data

    @property
    def primary_location(self) -> Optional[CompanyLocationResponse]:
        return self.locations[0] if self.locations else None


class CompanyDocumentResponse(BaseModel):
    """Uploaded compliance document."""
    id: str
    company_id: str
    document_type: DocumentType
    original_name: str
    url: str
    uploaded_at: datetime
    verification_status: DocumentVerificationStatus = DocumentVerificationStatus.PENDING
    verification_notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator('id', 'company_id', mode='before')
    @classmethod
    def convert_uuid(cls, v: Any) -> Any:
        return _str_id(v)


# ==================== Query & Pagination ====================

class CompanyQuery(BaseModel):
    """Company list filters.

    Blank strings count as unset. ``page``/``limit`` fall back to their
    defaults when missing, non-integer or not positive.
    """
    search: Optional[str] = None
    verified: Optional[bool] = None
    industry: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    page: int = settings.DEFAULT_PAGE
    limit: int = settings.DEFAULT_PAGE_SIZE

    @field_validator('search', 'industry', 'city', 'country', mode='before')
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator('page', mode='before')
    @classmethod
    def default_page(cls, v: Any) -> int:
        return _positive_int(v, settings.DEFAULT_PAGE)

    @field_validator('limit', mode='before')
    @classmethod
    def default_limit(cls, v: Any) -> int:
        return _positive_int(v, settings.DEFAULT_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


class Pagination(BaseModel):
    """Pagination metadata; always derived from total and limit."""
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if limit > 0 else 0,
        )


class CompanyListResponse(BaseModel):
    """Response for paginated company list."""
    items: List[CompanyResponse]
    pagination: Pagination
    pending_count: int = 0


# ==================== Verification ====================

class VerificationDecision(BaseModel):
    """Approve/reject decision for a single company."""
    is_approved: bool
    notes: Optional[str] = None


class BulkActionType(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class BulkCompanyAction(BaseModel):
    """One decision applied to many companies; duplicate ids are ignored."""
    company_ids: List[str] = Field(default_factory=list)
    action: BulkActionType
    notes: Optional[str] = None

    @field_validator('company_ids', mode='before')
    @classmethod
    def convert_uuids(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple, set)):
            return [_str_id(item) for item in v]
        return v

    @property
    def distinct_ids(self) -> List[str]:
        return list(dict.fromkeys(self.company_ids))


class BulkActionResult(BaseModel):
    """Bulk action result"""
    message: str
    succeeded: int
    failed: int
    total: int
    errors: List[Dict[str, Any]] = Field(default_factory=list)


# ==================== Compliance ====================

class ComplianceStatus(str, Enum):
    """Display classification derived from the verification flag and documents."""
    VERIFIED = "VERIFIED"
    INCOMPLETE = "INCOMPLETE"
    PENDING_REVIEW = "PENDING_REVIEW"
    NON_COMPLIANT = "NON_COMPLIANT"


class ComplianceReport(BaseModel):
    """Derived compliance classification; never persisted."""
    company_id: str
    status: ComplianceStatus
    required_documents_present: int
    missing_document_types: List[DocumentType] = Field(default_factory=list)
    pending_document_types: List[DocumentType] = Field(default_factory=list)


class LabelledDocument(CompanyDocumentResponse):
    """Document with display labels."""
    document_type_label: str
    verification_status_label: str


class CompanyComplianceResponse(BaseModel):
    """Everything a reviewer needs to decide on one company."""
    company: CompanyResponse
    documents: List[LabelledDocument]
    compliance: ComplianceReport
