"""
Integration tests for the register, login and current-user use cases.

Handlers run through the facade against a real (SQLite) repository and
unit of work, with a cheap hasher and a fixed-key token issuer.
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from gatehouse.application.common.results import ErrorKind, Failure, Success
from gatehouse.application.identity import commands
from gatehouse.application.identity.commands import ALREADY_REGISTERED, INVALID_CREDENTIALS, PASSWORD_REQUIRED
from gatehouse.application.identity.queries import ACCOUNT_NOT_FOUND
from gatehouse.domain.identity.events import AccountRegistered
from gatehouse.domain.identity.services import EMAIL_TAKEN, USERNAME_TAKEN
from gatehouse.domain.identity.value_objects import Username
from gatehouse.infrastructure.database.repositories.identity import AccountRepository
from gatehouse.infrastructure.database.unit_of_work import UnitOfWork
from gatehouse.interfaces.facade import GatehouseFacade


class TestRegister:
    async def test_success_returns_token_and_summary(self, facade, token_issuer) -> None:
        result = await facade.register("alice", "a@x.com", "Password123")

        assert isinstance(result, Success)
        assert result.value.account.id > 0
        assert result.value.account.username == "alice"
        assert result.value.account.email == "a@x.com"
        assert token_issuer.subject_id(result.value.token) == result.value.account.id

    async def test_normalizes_input(self, facade) -> None:
        result = await facade.register("  alice  ", "  A@X.COM ", "Password123")

        assert result.value.account.username == "alice"
        assert result.value.account.email == "a@x.com"

    async def test_persists_hash_not_plaintext(self, facade, repository) -> None:
        await facade.register("alice", "a@x.com", "Password123")

        stored = await repository.get_by_username(Username("alice"))

        assert stored is not None
        assert "Password123" not in stored.password_hash.value
        assert stored.password_salt.value

    async def test_short_username_is_validation_failure(self, facade) -> None:
        result = await facade.register("ab", "a@x.com", "Password123")

        assert result == Failure("Username must be at least 3 characters long.", ErrorKind.VALIDATION)

    async def test_bad_email_is_validation_failure(self, facade) -> None:
        result = await facade.register("alice", "bad-email", "Password123")

        assert result == Failure("Invalid email format.", ErrorKind.VALIDATION)

    async def test_blank_password_is_validation_failure(self, facade) -> None:
        result = await facade.register("alice", "a@x.com", "   ")

        assert result == Failure(PASSWORD_REQUIRED, ErrorKind.VALIDATION)

    async def test_duplicate_username_conflicts(self, facade) -> None:
        first = await facade.register("alice", "a@x.com", "Password123")
        second = await facade.register(" alice ", "other@x.com", "Password123")

        assert isinstance(first, Success)
        assert second == Failure(USERNAME_TAKEN, ErrorKind.CONFLICT)

    async def test_duplicate_email_conflicts(self, facade) -> None:
        first = await facade.register("alice", "a@x.com", "Password123")
        second = await facade.register("bob", "A@X.com", "Password123")

        assert isinstance(first, Success)
        assert second == Failure(EMAIL_TAKEN, ErrorKind.CONFLICT)

    async def test_username_conflict_wins_over_email_conflict(self, facade) -> None:
        await facade.register("alice", "a@x.com", "Password123")

        result = await facade.register("alice", "a@x.com", "Password123")

        assert result.message == USERNAME_TAKEN

    async def test_lost_race_maps_storage_violation_to_conflict(
        self, session, hasher, token_issuer
    ) -> None:
        repository = AccountRepository(session)
        # Both requests pass the existence check before either commits
        repository.username_exists = AsyncMock(return_value=False)
        repository.email_exists = AsyncMock(return_value=False)
        facade = GatehouseFacade(
            account_repo=repository, unit_of_work=UnitOfWork(session),
            hasher=hasher, token_issuer=token_issuer,
        )

        first = await facade.register("alice", "a@x.com", "Password123")
        second = await facade.register("alice", "a@x.com", "Password123")

        assert isinstance(first, Success)
        assert second == Failure(ALREADY_REGISTERED, ErrorKind.CONFLICT)

    async def test_publishes_registered_event_after_commit(self, facade, publisher) -> None:
        received = []
        publisher.subscribe(AccountRegistered.event_type, received.append)

        result = await facade.register("alice", "a@x.com", "Password123")

        assert len(received) == 1
        assert received[0].account_id == result.value.account.id
        assert received[0].username == "alice"

    async def test_failing_subscriber_does_not_fail_registration(self, facade, publisher, repository) -> None:
        publisher.subscribe(AccountRegistered.event_type, Mock(side_effect=RuntimeError("boom")))

        result = await facade.register("alice", "a@x.com", "Password123")

        assert isinstance(result, Success)
        assert await repository.username_exists(Username("alice"))

    async def test_failed_registration_writes_and_publishes_nothing(self) -> None:
        repo = AsyncMock()
        repo.username_exists.return_value = True
        unit_of_work = AsyncMock()
        publisher = AsyncMock()

        result = await commands.register_account(
            username="alice", email="a@x.com", password="Password123",
            account_repo=repo, unit_of_work=unit_of_work,
            hasher=Mock(), token_issuer=Mock(), publisher=publisher,
        )

        assert result.kind is ErrorKind.CONFLICT
        repo.add.assert_not_awaited()
        unit_of_work.save_changes.assert_not_awaited()
        publisher.publish.assert_not_awaited()


class TestLogin:
    async def test_round_trip_with_register(self, facade) -> None:
        registered = await facade.register("alice", "a@x.com", "Password123")

        logged_in = await facade.login("alice", "Password123")

        assert isinstance(logged_in, Success)
        assert logged_in.value.account.id == registered.value.account.id
        assert logged_in.value.token != registered.value.token

    async def test_username_is_trimmed(self, facade) -> None:
        await facade.register("alice", "a@x.com", "Password123")

        assert isinstance(await facade.login("  alice ", "Password123"), Success)

    async def test_unknown_user_and_wrong_password_share_message(self, facade) -> None:
        await facade.register("alice", "a@x.com", "Password123")

        unknown = await facade.login("nobody", "Password123")
        wrong = await facade.login("alice", "WrongPassword1")

        assert unknown.kind is ErrorKind.UNAUTHORIZED
        assert wrong.kind is ErrorKind.UNAUTHORIZED
        assert unknown.message.encode() == wrong.message.encode() == INVALID_CREDENTIALS.encode()

    async def test_unknown_user_still_derives_a_key(self, facade, hasher) -> None:
        with patch.object(hasher, "hash_password", wraps=hasher.hash_password) as derive:
            result = await facade.login("nobody", "Password123")

        assert result == Failure(INVALID_CREDENTIALS, ErrorKind.UNAUTHORIZED)
        derive.assert_called_once_with("Password123")

    async def test_invalid_username_is_validation_failure(self, facade) -> None:
        result = await facade.login("ab", "Password123")

        assert result.kind is ErrorKind.VALIDATION

    async def test_empty_password_is_validation_failure(self, facade) -> None:
        result = await facade.login("alice", "")

        assert result == Failure(PASSWORD_REQUIRED, ErrorKind.VALIDATION)


class TestGetCurrentUser:
    async def test_returns_summary(self, facade) -> None:
        registered = await facade.register("alice", "a@x.com", "Password123")

        result = await facade.get_current_user(registered.value.account.id)

        assert isinstance(result, Success)
        assert result.value.account == registered.value.account

    @pytest.mark.parametrize("subject_id", [999, 0, -1])
    async def test_missing_account_is_not_found(self, facade, subject_id) -> None:
        result = await facade.get_current_user(subject_id)

        assert result == Failure(ACCOUNT_NOT_FOUND, ErrorKind.NOT_FOUND)
