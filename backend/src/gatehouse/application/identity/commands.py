"""Identity use-case commands: register, login.

Every expected failure is returned as a ``Failure``; the first one ends the
use case. Nothing is retried.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from gatehouse.application.common.results import Failure, Result, Success
from gatehouse.domain.events import DomainEventPublisher
from gatehouse.domain.identity.entities import AccountSummary
from gatehouse.domain.identity.events import AccountRegistered
from gatehouse.domain.identity.exceptions import DuplicateAccountError
from gatehouse.domain.identity.repositories import IAccountRepository, IUnitOfWork
from gatehouse.domain.identity.services import RegistrationEligibilityService
from gatehouse.domain.identity.value_objects import Email, Invalid, Username
from gatehouse.infrastructure.auth.jwt import TokenIssuer
from gatehouse.infrastructure.auth.password import CredentialHasher

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password. Please check your credentials and try again."
PASSWORD_REQUIRED = "Password is required."
ALREADY_REGISTERED = "This username or email is already registered."


@dataclass(frozen=True)
class AuthResult:
    token: str
    account: AccountSummary


async def register_account(
    *,
    username: str,
    email: str,
    password: str,
    account_repo: IAccountRepository,
    unit_of_work: IUnitOfWork,
    hasher: CredentialHasher,
    token_issuer: TokenIssuer,
    publisher: DomainEventPublisher | None = None,
) -> Result[AuthResult]:
    """Register a new account and return an access token."""
    parsed_username = Username.create(username)
    if isinstance(parsed_username, Invalid):
        return Failure.validation(parsed_username.reason)
    parsed_email = Email.create(email)
    if isinstance(parsed_email, Invalid):
        return Failure.validation(parsed_email.reason)
    if not password or not password.strip():
        return Failure.validation(PASSWORD_REQUIRED)

    eligibility = RegistrationEligibilityService(account_repo)
    allowed, reason = await eligibility.can_register(parsed_username.value, parsed_email.value)
    if not allowed:
        return Failure.conflict(reason)

    password_hash, password_salt = hasher.hash_password(password)
    account = eligibility.create_account(
        parsed_username.value, parsed_email.value, password_hash, password_salt
    )

    await account_repo.add(account)
    try:
        await unit_of_work.save_changes()
    except DuplicateAccountError:
        # Lost the race against a concurrent registration
        return Failure.conflict(ALREADY_REGISTERED)
    logger.info("Registered account %s (%s)", account.id, account.username)

    token = token_issuer.generate_token(account)

    if publisher is not None:
        await publisher.publish(
            AccountRegistered(
                account_id=account.id,
                username=str(account.username),
                email=str(account.email),
            )
        )

    return Success(AuthResult(token=token, account=AccountSummary.of(account)))


async def login(
    *,
    username: str,
    password: str,
    account_repo: IAccountRepository,
    hasher: CredentialHasher,
    token_issuer: TokenIssuer,
) -> Result[AuthResult]:
    """Authenticate an account and return a fresh access token."""
    parsed_username = Username.create(username)
    if isinstance(parsed_username, Invalid):
        return Failure.validation(parsed_username.reason)
    if not password:
        return Failure.validation(PASSWORD_REQUIRED)

    account = await account_repo.get_by_username(parsed_username.value)
    if account is None:
        # Spend one key derivation so unknown usernames cost as much as wrong passwords
        hasher.hash_password(password)
        logger.info("Login rejected for %s", parsed_username.value)
        return Failure.unauthorized(INVALID_CREDENTIALS)

    if not hasher.verify_password(password, account.password_hash, account.password_salt):
        logger.info("Login rejected for %s", parsed_username.value)
        return Failure.unauthorized(INVALID_CREDENTIALS)

    token = token_issuer.generate_token(account)
    return Success(AuthResult(token=token, account=AccountSummary.of(account)))
