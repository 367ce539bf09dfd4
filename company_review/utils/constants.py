"""Common constants."""

from company_review.models.company_document import DocumentType, DocumentVerificationStatus

# Documents a company must submit before it can be reviewed
REQUIRED_DOCUMENT_TYPES = frozenset({
    DocumentType.BUSINESS_LICENSE,
    DocumentType.COMPANY_REGISTRATION,
    DocumentType.ID_DOCUMENT,
})

# Display order for the required documents
REQUIRED_DOCUMENT_ORDER = [
    DocumentType.BUSINESS_LICENSE,
    DocumentType.COMPANY_REGISTRATION,
    DocumentType.ID_DOCUMENT,
]

DOCUMENT_TYPE_LABELS = {
    DocumentType.BUSINESS_LICENSE.value: "Business License",
    DocumentType.COMPANY_REGISTRATION.value: "Company Registration",
    DocumentType.COMPANY_LOGO.value: "Company Logo",
    DocumentType.ID_DOCUMENT.value: "ID Document",
}

VERIFICATION_STATUS_LABELS = {
    DocumentVerificationStatus.PENDING.value: "Pending Review",
    DocumentVerificationStatus.APPROVED.value: "Approved",
    DocumentVerificationStatus.REJECTED.value: "Rejected",
    DocumentVerificationStatus.REQUIRES_RESUBMISSION.value: "Requires Resubmission",
}


def get_document_type_label(document_type) -> str:
    """Human-readable document type; unknown types label as themselves."""
    value = getattr(document_type, "value", document_type)
    return DOCUMENT_TYPE_LABELS.get(value, value)


def get_verification_status_label(status) -> str:
    """Human-readable document status; unknown statuses label as themselves."""
    value = getattr(status, "value", status)
    return VERIFICATION_STATUS_LABELS.get(value, value)
