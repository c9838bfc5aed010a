"""
Usage ledger.

Reserves a generation before content is produced and releases it again if
production fails, so committed counters only reflect delivered generations.
"""

import logging

from core.domain.account import Account
from core.interfaces.repositories import UnitOfWork
from core.plans import plan_quota

logger = logging.getLogger(__name__)


class UsageLedger:
    """Atomic reserve / compensating release over the account counters."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def reserve(self, account: Account) -> bool:
        """
        Claim one generation against the account's current plan quota.

        The check and the increment happen in one conditional update, so two
        concurrent callers can never both take the last slot. Returns False
        when the quota is exhausted.
        """
        quota = plan_quota(account.plan)
        reserved = await self.uow.accounts.try_consume_generation(account.id, quota)
        if reserved:
            await self.uow.commit()
        else:
            await self.uow.rollback()
            logger.info("Generation reservation refused for account %s (quota=%s)", account.id, quota)
        return reserved

    async def release(self, account_id: str) -> None:
        """Give back a reserved generation after a failed production step."""
        await self.uow.accounts.release_generation(account_id)
        await self.uow.commit()
        logger.info("Released generation reservation for account %s", account_id)
