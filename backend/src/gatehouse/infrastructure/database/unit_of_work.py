"""Single commit point for a request-scoped session."""
import asyncio
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gatehouse.domain.identity.exceptions import DuplicateAccountError
from gatehouse.infrastructure.database.repositories.identity import staged_accounts

logger = logging.getLogger(__name__)


class UnitOfWork:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save_changes(self) -> int:
        """Flush and commit everything staged on the session.

        Returns the number of account rows written. Staged accounts get their
        storage ids only after the commit succeeds.
        """
        session = self._session
        staged = staged_accounts(session)
        try:
            await session.flush()
            assigned = [(account, model.id) for account, model in staged]
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            logger.info("Commit rejected by a uniqueness constraint")
            raise DuplicateAccountError("Account violates a uniqueness constraint") from exc
        except (SQLAlchemyError, asyncio.CancelledError):
            # Abort without leaving a partial write behind
            await session.rollback()
            raise
        finally:
            staged.clear()

        for account, account_id in assigned:
            account.id = account_id
        return len(assigned)
