"""
Document Compliance Evaluator

Derives a display-only review classification for a company from its
verification flag and its (unordered) document set. Nothing here writes
``is_verified``; only a verification decision does.
"""

from typing import TYPE_CHECKING, Iterable, List, Union

import structlog

from company_review.core.security import Role, authorize
from company_review.models.company_document import DocumentVerificationStatus
from company_review.schemas.company import (
    CompanyComplianceResponse,
    CompanyDocumentResponse,
    ComplianceReport,
    ComplianceStatus,
    LabelledDocument,
)
from company_review.utils.constants import (
    REQUIRED_DOCUMENT_ORDER,
    REQUIRED_DOCUMENT_TYPES,
    get_document_type_label,
    get_verification_status_label,
)

if TYPE_CHECKING:
    from company_review.repositories.base import CompanyRepository

logger = structlog.get_logger(__name__)

# Required-type documents needed before a company is reviewable
REQUIRED_DOCUMENT_COUNT = 3


def _required(documents: Iterable) -> List:
    return [doc for doc in documents if doc.document_type in REQUIRED_DOCUMENT_TYPES]


def evaluate_compliance(is_verified: bool, documents: Iterable) -> ComplianceStatus:
    """
    Classify a company; the first matching rule wins.

    1. verified                                   -> VERIFIED
    2. fewer than 3 required-type documents       -> INCOMPLETE
    3. any required-type document still PENDING   -> PENDING_REVIEW
    4. otherwise                                  -> NON_COMPLIANT

    Rule 4 covers both "something was rejected" and "everything approved but
    the company flag was never set"; callers must not read more into it.

    Args:
        is_verified: the company's verification flag
        documents: objects exposing ``document_type`` and ``verification_status``
    """
    if is_verified:
        return ComplianceStatus.VERIFIED

    # Counts documents, not distinct types
    required_docs = _required(documents)
    if len(required_docs) < REQUIRED_DOCUMENT_COUNT:
        return ComplianceStatus.INCOMPLETE

    if any(doc.verification_status == DocumentVerificationStatus.PENDING for doc in required_docs):
        return ComplianceStatus.PENDING_REVIEW

    return ComplianceStatus.NON_COMPLIANT


def missing_document_types(documents: Iterable) -> List:
    """Required types with no uploaded document."""
    present = {doc.document_type for doc in documents}
    return [doc_type for doc_type in REQUIRED_DOCUMENT_ORDER if doc_type not in present]


def pending_document_types(documents: Iterable) -> List:
    """Required types with at least one document awaiting review."""
    pending = {
        doc.document_type
        for doc in _required(documents)
        if doc.verification_status == DocumentVerificationStatus.PENDING
    }
    return [doc_type for doc_type in REQUIRED_DOCUMENT_ORDER if doc_type in pending]


def build_compliance_report(company_id: str, is_verified: bool, documents: Iterable) -> ComplianceReport:
    documents = list(documents)
    return ComplianceReport(
        company_id=company_id,
        status=evaluate_compliance(is_verified, documents),
        required_documents_present=len(_required(documents)),
        missing_document_types=missing_document_types(documents),
        pending_document_types=pending_document_types(documents),
    )


def label_document(document: CompanyDocumentResponse) -> LabelledDocument:
    return LabelledDocument(
        **document.model_dump(),
        document_type_label=get_document_type_label(document.document_type),
        verification_status_label=get_verification_status_label(document.verification_status),
    )


async def load_company_compliance(
    repository: "CompanyRepository",
    company_id: str,
    role: Union[Role, str],
) -> CompanyComplianceResponse:
    """Fetch a company with its documents and classify it for the reviewer."""
    authorize(role, "documents:read")

    company = await repository.get_company(company_id)
    documents = await repository.get_company_documents(company_id)
    report = build_compliance_report(company.id, company.is_verified, documents)

    logger.debug(
        "company_compliance_evaluated",
        company_id=company.id,
        status=report.status.value,
        required_documents_present=report.required_documents_present,
    )

    return CompanyComplianceResponse(
        company=company,
        documents=[label_document(doc) for doc in documents],
        compliance=report,
    )
