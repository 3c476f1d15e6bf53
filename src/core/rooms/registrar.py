from __future__ import annotations

import asyncio
import logging

from .errors import MembershipRegistrationFailed
from .mapper import unique_ids
from .models import SourceRoom

logger = logging.getLogger(__name__)


class MembershipRegistrar:
    """Enregistre les membres des conversations directes dans le store des memberships.

    Les créations partent en parallèle ; le premier échec fait échouer l'ensemble
    (les memberships déjà créées ne sont pas annulées).
    """

    def __init__(self, storage, log: logging.Logger | logging.LoggerAdapter | None = None):
        self.storage = storage
        self.log = log or logger

    async def register_memberships(self, source: SourceRoom, log: logging.Logger | logging.LoggerAdapter | None = None) -> None:
        log = log or self.log
        if not source.is_direct or not source.uids:
            return

        async def create(uid: str):
            await self.storage.create_membership(source.id, uid)
            log.debug("Membership de %s dans la conversation directe %s créée", uid, source.id)

        try:
            await asyncio.gather(*(create(uid) for uid in unique_ids(source.uids)))
        except Exception as exc:
            raise MembershipRegistrationFailed(source.id) from exc


__all__ = ["MembershipRegistrar"]
