"""
Tests for review_session.py - snapshot updates and the in-flight guard
"""
import asyncio

import pytest

from company_review.core.exceptions import ValidationError
from company_review.repositories.memory import InMemoryCompanyRepository
from company_review.schemas.company import (
    BulkActionType,
    BulkCompanyAction,
    CompanyQuery,
    VerificationDecision,
)
from company_review.services.review_session import ReviewSession


class GatedRepository(InMemoryCompanyRepository):
    """Holds every decision until ``release`` is set."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.release = asyncio.Event()
        self.started = asyncio.Event()
        self.calls = 0

    async def decide_verification(self, company_id, decision):
        self.calls += 1
        self.started.set()
        await self.release.wait()
        return await super().decide_verification(company_id, decision)


@pytest.fixture
def companies(make_company):
    return [make_company(f"Company {i}") for i in range(3)]


class TestReviewSession:

    async def test_refresh_loads_snapshot(self, companies):
        session = ReviewSession(InMemoryCompanyRepository(companies=companies), "ADMIN")

        page = await session.refresh(CompanyQuery(limit=2))

        assert session.page is page
        assert len(page.items) == 2
        assert page.pagination.total == 3
        assert page.pending_count == 2

    async def test_decide_merges_result_in_place(self, companies):
        session = ReviewSession(InMemoryCompanyRepository(companies=companies), "ADMIN")
        await session.refresh()
        target = session.page.items[1]

        updated = await session.decide(target.id, VerificationDecision(is_approved=True))

        assert updated.is_verified is True
        assert session.page.items[1].is_verified is True
        assert [c.id for c in session.page.items] == [c.id for c in reversed(companies)]
        assert session.page.pending_count == 2

    async def test_snapshot_is_not_requeried_after_single_decision(self, companies):
        session = ReviewSession(
            InMemoryCompanyRepository(companies=companies),
            "ADMIN",
            CompanyQuery(verified=False),
        )
        await session.refresh()
        target = session.page.items[0]

        await session.decide(target.id, VerificationDecision(is_approved=True))

        # Stale against the filter until the next refresh
        assert target.id in [c.id for c in session.page.items]
        await session.refresh()
        assert target.id not in [c.id for c in session.page.items]

    async def test_second_call_while_in_flight_is_ignored(self, companies):
        repository = GatedRepository(companies=companies)
        session = ReviewSession(repository, "ADMIN")

        first = asyncio.create_task(
            session.decide(companies[0].id, VerificationDecision(is_approved=True))
        )
        await repository.started.wait()
        assert session.busy

        second = await session.decide(companies[1].id, VerificationDecision(is_approved=True))
        ignored_bulk = await session.bulk(
            BulkCompanyAction(company_ids=[companies[2].id], action=BulkActionType.APPROVE)
        )

        repository.release.set()
        result = await first

        assert second is None
        assert ignored_bulk is None
        assert result.is_verified is True
        assert repository.calls == 1
        assert not session.busy
        assert (await repository.get_company(companies[1].id)).is_verified is False

    async def test_guard_released_after_failure(self, companies):
        session = ReviewSession(InMemoryCompanyRepository(companies=companies), "ADMIN")

        with pytest.raises(ValidationError):
            await session.decide(companies[0].id, VerificationDecision(is_approved=False))

        assert not session.busy
        updated = await session.decide(
            companies[0].id, VerificationDecision(is_approved=False, notes="Expired license")
        )
        assert updated.is_verified is False

    async def test_bulk_refreshes_snapshot(self, companies):
        session = ReviewSession(
            InMemoryCompanyRepository(companies=companies),
            "SUPER_ADMIN",
            CompanyQuery(verified=False),
        )
        await session.refresh()

        result = await session.bulk(
            BulkCompanyAction(
                company_ids=[companies[0].id, companies[1].id],
                action=BulkActionType.APPROVE,
            )
        )

        assert result.succeeded == 2
        assert [c.id for c in session.page.items] == [companies[2].id]
