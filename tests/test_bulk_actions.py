"""
Tests for bulk_actions.py - Bulk Action Processor
"""
import pytest

from company_review.core.exceptions import AuthorizationError, PersistenceError, ValidationError
from company_review.repositories.memory import InMemoryCompanyRepository
from company_review.schemas.company import BulkActionType, BulkCompanyAction
from company_review.services.bulk_actions import process_bulk_action


class FlakyRepository(InMemoryCompanyRepository):
    """Fails writes for selected ids; counts every write attempt."""

    def __init__(self, failing_ids=(), **kwargs):
        super().__init__(**kwargs)
        self.failing_ids = set(failing_ids)
        self.calls = []

    async def decide_verification(self, company_id, decision):
        self.calls.append(company_id)
        if company_id in self.failing_ids:
            raise PersistenceError("write timed out", company_id=company_id)
        return await super().decide_verification(company_id, decision)


@pytest.fixture
def seeded(make_company):
    def _seed(count=3, failing=(), verified=False):
        companies = [make_company(f"Company {i}", is_verified=verified) for i in range(count)]
        repository = FlakyRepository(
            failing_ids=[companies[i].id for i in failing],
            companies=companies,
        )
        return repository, companies
    return _seed


def bulk(action, ids, notes=None):
    return BulkCompanyAction(company_ids=ids, action=action, notes=notes)


class TestProcessBulkAction:

    async def test_approves_every_company(self, seeded):
        repository, companies = seeded(3)

        result = await process_bulk_action(
            repository, bulk(BulkActionType.APPROVE, [c.id for c in companies]), "ADMIN"
        )

        assert (result.succeeded, result.failed, result.total) == (3, 0, 3)
        assert result.message == "Successfully approved 3 of 3 companies"
        for company in companies:
            assert (await repository.get_company(company.id)).is_verified is True

    async def test_unknown_id_is_counted_not_raised(self, seeded):
        repository, companies = seeded(2, verified=True)
        ids = [companies[0].id, "no-such-company", companies[1].id]

        result = await process_bulk_action(repository, bulk(BulkActionType.REJECT, ids), "ADMIN")

        assert result.succeeded == 2
        assert result.failed == 1
        assert result.total == 3
        assert result.errors == [{"company_id": "no-such-company", "error": "Company no-such-company not found"}]
        assert result.message == "Successfully rejected 2 of 3 companies (1 failed)"
        assert (await repository.get_company(companies[1].id)).is_verified is False

    async def test_storage_failure_does_not_stop_the_batch(self, seeded):
        repository, companies = seeded(3, failing=[0])

        result = await process_bulk_action(
            repository, bulk(BulkActionType.APPROVE, [c.id for c in companies]), "SUPER_ADMIN"
        )

        assert (result.succeeded, result.failed) == (2, 1)
        assert result.errors[0]["company_id"] == companies[0].id
        assert repository.calls == [c.id for c in companies]
        assert (await repository.get_company(companies[0].id)).is_verified is False
        assert (await repository.get_company(companies[2].id)).is_verified is True

    async def test_succeeded_plus_failed_equals_distinct_ids(self, seeded):
        repository, companies = seeded(2, failing=[1])
        ids = [companies[0].id, companies[1].id, companies[0].id, "ghost", "ghost"]

        result = await process_bulk_action(repository, bulk(BulkActionType.APPROVE, ids), "ADMIN")

        assert result.total == 3
        assert result.succeeded + result.failed == result.total
        assert repository.calls == [companies[0].id, companies[1].id, "ghost"]

    async def test_bulk_reject_without_notes_is_allowed(self, seeded):
        repository, companies = seeded(1, verified=True)

        result = await process_bulk_action(
            repository, bulk(BulkActionType.REJECT, [companies[0].id], notes="  "), "ADMIN"
        )

        assert result.succeeded == 1
        assert (await repository.get_company(companies[0].id)).is_verified is False

    async def test_empty_selection_rejected_before_repository(self, seeded):
        repository, _ = seeded(2)

        with pytest.raises(ValidationError):
            await process_bulk_action(repository, bulk(BulkActionType.APPROVE, []), "ADMIN")

        assert repository.calls == []

    @pytest.mark.parametrize("role", ["EMPLOYER", "PROFESSOR", "OTHER"])
    async def test_other_roles_are_refused(self, seeded, role):
        repository, companies = seeded(1)

        with pytest.raises(AuthorizationError):
            await process_bulk_action(
                repository, bulk(BulkActionType.APPROVE, [companies[0].id]), role
            )

        assert repository.calls == []

    async def test_authorization_checked_before_empty_selection(self, seeded):
        repository, _ = seeded(0)
        with pytest.raises(AuthorizationError):
            await process_bulk_action(repository, bulk(BulkActionType.APPROVE, []), "STUDENT")
