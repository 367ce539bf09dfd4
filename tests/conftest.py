"""
Shared fixtures for company verification tests.

Companies get strictly increasing ``created_at`` values in creation order, so
newest-first listings are deterministic.
"""
import itertools
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from company_review.models.company_document import DocumentType, DocumentVerificationStatus
from company_review.repositories.memory import InMemoryCompanyRepository
from company_review.schemas.company import CompanyDocumentResponse, CompanyResponse

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def make_company():
    counter = itertools.count()

    def _make(
        name: str = "Acme Corp",
        *,
        is_verified: bool = False,
        industry: str = "Technology",
        city: str = "Pune",
        country: str = "India",
        description: str = None,
        extra_locations=(),
    ) -> CompanyResponse:
        index = next(counter)
        locations = [{"city": city, "country": country, "is_headquarters": True}]
        locations += [{"city": c, "country": k} for c, k in extra_locations]
        return CompanyResponse(
            id=str(uuid.uuid4()),
            name=name,
            industry=industry,
            size="51-200",
            description=description,
            owner={"name": "Owner", "email": f"owner{index}@example.com"},
            locations=locations,
            is_verified=is_verified,
            created_at=BASE_TIME + timedelta(minutes=index),
        )

    return _make


@pytest.fixture
def make_document():
    counter = itertools.count()

    def _make(
        company_id: str,
        document_type: DocumentType,
        status: DocumentVerificationStatus = DocumentVerificationStatus.PENDING,
    ) -> CompanyDocumentResponse:
        index = next(counter)
        return CompanyDocumentResponse(
            id=str(uuid.uuid4()),
            company_id=company_id,
            document_type=document_type,
            original_name=f"{document_type.value.lower()}_{index}.pdf",
            url=f"https://files.example.com/{company_id}/{index}.pdf",
            uploaded_at=BASE_TIME + timedelta(hours=index),
            verification_status=status,
        )

    return _make


@pytest.fixture
def repository():
    return InMemoryCompanyRepository()
