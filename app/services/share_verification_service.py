"""
Share verification service — the investor share-link access check.

Validation sequence (each stage short-circuits):

1. Both ``shareToken`` and ``password`` present        → 400 otherwise
2. A share with that token exists                      → 404 otherwise
3. The share is active                                 → 403 otherwise
4. The share has not expired (null = never expires)    → 403 otherwise
5. The password matches exactly                        → 401 otherwise
6. Decode the stored venture id list                   → 500 if malformed
7. Load those ventures in portfolio order (missing ids are dropped)
8. Record the access (count + 1, last_accessed = now)

No failure path writes anything; a success writes exactly once (step 8).

Passwords are stored and compared in plaintext.  The comparison uses
``hmac.compare_digest`` so response timing does not leak how much of the
password matched; the exact-match semantics are unchanged.
"""

import hmac
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from app.core.exceptions import (
    BadRequestException,
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
)
from app.models.investor_share import InvestorShare
from app.models.venture import Venture
from app.repositories.investor_share_repo import InvestorShareRepository
from app.repositories.venture_repo import VentureRepository
from app.schemas.investor_share import SharedView, ShareVerifyResponse
from app.schemas.venture import VentureResponse

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _passwords_match(stored: str, supplied: str) -> bool:
    return hmac.compare_digest(stored.encode("utf-8"), supplied.encode("utf-8"))


class ShareVerificationService:
    """Validates share token + password and returns the shared ventures."""

    def __init__(
        self,
        share_repo: InvestorShareRepository,
        venture_repo: VentureRepository,
        clock: Clock = utcnow,
    ):
        self._share_repo = share_repo
        self._venture_repo = venture_repo
        self._clock = clock

    async def verify(
        self, share_token: Optional[str], password: Optional[str]
    ) -> ShareVerifyResponse:
        """
        Run the full verification pipeline.

        Raises :class:`BadRequestException`, :class:`NotFoundException`,
        :class:`ForbiddenException` or :class:`UnauthorizedException` for the
        classified failures; a malformed stored id list surfaces as
        :class:`~app.core.exceptions.MalformedVentureIdList`.
        """
        if not share_token or not password:
            raise BadRequestException("Missing share token or password")

        share = await self._share_repo.get_by_token(share_token)
        if share is None:
            raise NotFoundException("Invalid share token")

        now = self._clock()
        self._check_access_policy(share, now)

        if not _passwords_match(share.password, password):
            logger.info("Rejected password for share %s", share.id)
            raise UnauthorizedException("Invalid password")

        ventures = await self._resolve_ventures(share)

        await self._share_repo.record_access(share.id, now)
        logger.info(
            "Share %s verified — %d venture(s) disclosed",
            share.id,
            len(ventures),
            extra={"share_id": share.id},
        )

        return ShareVerifyResponse(
            share=SharedView.model_validate(share),
            ventures=[VentureResponse.model_validate(v) for v in ventures],
        )

    @staticmethod
    def _check_access_policy(share: InvestorShare, now: datetime) -> None:
        """Reject deactivated shares, then shares whose expiry is in the past."""
        if not share.is_active:
            logger.info("Share %s is deactivated", share.id)
            raise ForbiddenException("This share has been deactivated")

        if share.expires_at is not None and _as_utc(share.expires_at) < now:
            logger.info("Share %s expired at %s", share.id, share.expires_at)
            raise ForbiddenException("This share has expired")

    async def _resolve_ventures(self, share: InvestorShare) -> List[Venture]:
        venture_ids = share.venture_id_list
        ventures = await self._venture_repo.get_many(list(venture_ids))
        if len(ventures) < len(venture_ids):
            logger.debug(
                "Share %s references %d venture(s) that no longer exist",
                share.id,
                len(venture_ids) - len(ventures),
            )
        return ventures
