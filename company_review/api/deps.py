"""
API Dependencies
Common dependencies for API endpoints (database, company store, caller role)
"""

from typing import AsyncGenerator, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from company_review.config import settings
from company_review.core.security import Role, authorize, get_current_role
from company_review.db.session import get_db as get_db_session
from company_review.repositories import (
    CompanyRepository,
    InMemoryCompanyRepository,
    SQLAlchemyCompanyRepository,
)

# Process-wide store when COMPANY_STORE=memory
_memory_repository: Optional[InMemoryCompanyRepository] = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async for session in get_db_session():
        yield session


def get_memory_repository() -> InMemoryCompanyRepository:
    """
    Process-wide in-memory store

    Starts empty; the API only reads and decides, so callers (tests,
    local smoke runs) seed it with add_company/add_document.
    """
    global _memory_repository

    if _memory_repository is None:
        _memory_repository = InMemoryCompanyRepository()
    return _memory_repository


async def get_company_repository(
    db: AsyncSession = Depends(get_db),
) -> CompanyRepository:
    """
    Company store selected by settings.COMPANY_STORE
    ("database" for PostgreSQL, "memory" for the seeded in-memory store)
    """
    if settings.COMPANY_STORE.lower() == "memory":
        return get_memory_repository()

    return SQLAlchemyCompanyRepository(db)


async def require_reviewer_role(
    role: Role = Depends(get_current_role),
) -> Role:
    """
    Require SuperAdmin or Admin role
    """
    authorize(role, "companies:read")
    return role
