import asyncio

import pytest

from roster.infrastructure.database.repositories import SqlAccountRepository
from roster.modules.accounts import AccountColumnSet, DuplicateEmail, StorageUnavailable


async def hang(*args, **kwargs):
    await asyncio.sleep(1)


@pytest.mark.asyncio
async def test_slow_statement_becomes_storage_unavailable(session, mocker):
    mocker.patch.object(session, "execute", side_effect=hang)
    repository = SqlAccountRepository(session, AccountColumnSet.FULL, timeout=0.01)

    with pytest.raises(StorageUnavailable):
        await repository.get_by_email("ana@example.com")


@pytest.mark.asyncio
async def test_slow_commit_becomes_storage_unavailable(session, mocker):
    mocker.patch.object(session, "commit", side_effect=hang)
    repository = SqlAccountRepository(session, AccountColumnSet.FULL, timeout=0.01)

    with pytest.raises(StorageUnavailable):
        await repository.commit()


@pytest.mark.asyncio
async def test_unique_violation_on_insert_is_a_duplicate(repository):
    await repository.create_account(display_name="Ana Souza", email="ana@example.com", password_hash="")
    await repository.commit()

    with pytest.raises(DuplicateEmail):
        await repository.create_account(display_name="Ana Again", email="ana@example.com", password_hash="")


@pytest.mark.asyncio
async def test_unique_violation_on_update_is_storage_unavailable(repository):
    first = await repository.create_account(
        display_name="Ana Souza", email="ana@example.com", password_hash="", federated_subject_id="google-sub-1"
    )
    second = await repository.create_account(display_name="Bruno Lima", email="bruno@example.com", password_hash="")
    await repository.commit()

    assert first != second
    with pytest.raises(StorageUnavailable):
        # The subject already belongs to the first account.
        await repository.link_subject(second, "google-sub-1")
