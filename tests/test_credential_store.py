import bcrypt
import pytest

from roster.core.crypto import NO_PASSWORD
from roster.modules.accounts import AuthenticationFailed, DuplicateEmail


@pytest.mark.asyncio
async def test_create_then_verify(credentials, repository):
    password_hash = await credentials.hash("s3cret-pass")
    account_id = await credentials.create("Ana Souza", "ana@example.com", password_hash)
    await repository.commit()

    assert await credentials.exists("ana@example.com")
    account = await credentials.verify("ana@example.com", "s3cret-pass")
    assert account.id == account_id
    assert account.display_name == "Ana Souza"
    assert account.has_local_password


@pytest.mark.asyncio
async def test_exists_ignores_case(credentials, repository):
    await credentials.create("Ana Souza", "ana@example.com", await credentials.hash("s3cret-pass"))
    await repository.commit()

    assert await credentials.exists("ANA@example.com")
    assert not await credentials.exists("bruno@example.com")


@pytest.mark.asyncio
async def test_unknown_email_and_wrong_password_fail_the_same_way(credentials, repository):
    await credentials.create("Ana Souza", "ana@example.com", await credentials.hash("s3cret-pass"))
    await repository.commit()

    with pytest.raises(AuthenticationFailed) as wrong_password:
        await credentials.verify("ana@example.com", "not-the-pass")
    with pytest.raises(AuthenticationFailed) as unknown_email:
        await credentials.verify("nobody@example.com", "s3cret-pass")

    assert str(wrong_password.value) == str(unknown_email.value)


@pytest.mark.asyncio
async def test_account_without_local_password_never_verifies(credentials, repository):
    await credentials.create("Ana Souza", "ana@example.com", NO_PASSWORD)
    await repository.commit()

    with pytest.raises(AuthenticationFailed):
        await credentials.verify("ana@example.com", "")
    with pytest.raises(AuthenticationFailed):
        await credentials.verify("ana@example.com", "anything")


@pytest.mark.asyncio
async def test_duplicate_insert_is_reported(credentials, repository):
    await credentials.create("Ana Souza", "ana@example.com", NO_PASSWORD)
    await repository.commit()

    with pytest.raises(DuplicateEmail):
        await credentials.create("Ana Again", "ana@example.com", NO_PASSWORD)


@pytest.mark.asyncio
async def test_password_less_account_costs_the_same_as_unknown_email(credentials, repository, mocker):
    await credentials.create("Ana Souza", "ana@example.com", NO_PASSWORD)
    await repository.commit()
    # Build the dummy hash up front so only comparisons are counted.
    credentials.hasher.burn("warm-up")
    checkpw = mocker.spy(bcrypt, "checkpw")

    with pytest.raises(AuthenticationFailed):
        await credentials.verify("nobody@example.com", "s3cret-pass")
    unknown_calls = checkpw.call_count

    with pytest.raises(AuthenticationFailed):
        await credentials.verify("ana@example.com", "s3cret-pass")

    assert unknown_calls == 1
    assert checkpw.call_count - unknown_calls == unknown_calls
