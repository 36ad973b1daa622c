"""Identity use-case queries."""
from dataclasses import dataclass

from gatehouse.application.common.results import Failure, Result, Success
from gatehouse.domain.identity.entities import AccountSummary
from gatehouse.domain.identity.repositories import IAccountRepository

ACCOUNT_NOT_FOUND = "User not found."


@dataclass(frozen=True)
class CurrentUserResult:
    account: AccountSummary


async def get_current_user(subject_id: int, account_repo: IAccountRepository) -> Result[CurrentUserResult]:
    account = await account_repo.get_by_id(subject_id)
    if account is None:
        return Failure.not_found(ACCOUNT_NOT_FOUND)
    return Success(CurrentUserResult(account=AccountSummary.of(account)))
