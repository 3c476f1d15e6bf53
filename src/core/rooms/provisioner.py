from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from core.logging_config import RoomLoggerAdapter, log_http
from core.synapse import SessionOptions, get_user_session_options
from .errors import CreatorSessionUnavailable, InviteOrJoinFailed, RoomCreationFailed
from .mapper import map_room
from .models import EntityType, IdentityMapping, SourceRoom, TargetRoom
from .registrar import MembershipRegistrar

logger = logging.getLogger(__name__)

SessionProvider = Callable[[str], Awaitable[SessionOptions]]


class RoomProvisioner:
    """Crée une room Matrix à partir d'une room Rocket.Chat et y fait entrer ses membres.

    Séquence (chaque étape conditionnée par la précédente) :
        1. Traduction de la room (`map_room`)
        2. Séparation du créateur et du corps envoyé au homeserver
        3. Enregistrement des memberships des conversations directes
        4. Session du créateur, repli sur la session par défaut en cas d'échec
        5. `createRoom`
        6-7. Membres de la room hors créateur, résolus en identités Matrix (sans correspondance -> ignorés)
        8-9. Invitation puis join de chaque membre, en parallèle, premier échec fatal

    Aucune étape n'est rejouée et rien n'est annulé : une room créée reste en place
    même si l'invitation d'un membre échoue.
    """

    def __init__(
        self,
        client,
        storage,
        session_provider: Optional[SessionProvider] = None,
        registrar: Optional[MembershipRegistrar] = None,
        log: logging.Logger | logging.LoggerAdapter | None = None,
    ):
        self.client = client
        self.storage = storage
        self.session_provider = session_provider or (lambda user_id: get_user_session_options(storage, user_id))
        self.registrar = registrar or MembershipRegistrar(storage)
        self.log = log or logger

    async def provision(self, source: SourceRoom) -> TargetRoom:
        log = RoomLoggerAdapter(self.log, {"room": source.id})

        draft = map_room(source, log)
        creator_id = draft.creator_id
        room = draft.to_wire()

        await self.registrar.register_memberships(source, log)

        options = await self._resolve_session(creator_id, log)

        log.debug("Création de la room: %s", room.to_json())
        try:
            room_id = await self.client.create_room(room, options)
        except Exception as exc:
            raise RoomCreationFailed(source.id) from exc
        log.info("Room %s créée (%s)", room_id, source.name)

        try:
            members = await self._resolve_members(source.id, creator_id, log)
        except Exception as exc:
            raise InviteOrJoinFailed(source.id, room_id) from exc

        await asyncio.gather(*(self._invite_and_join(source.id, room_id, m, options, log) for m in members))

        return TargetRoom(
            room_id=room_id,
            source_id=source.id,
            room=room,
            invited=tuple(m.matrix_id for m in members),
        )

    async def _resolve_session(self, creator_id: str, log) -> SessionOptions:
        if not creator_id:
            return {}
        try:
            options = await self.session_provider(creator_id)
        except Exception as exc:
            # CreatorSessionUnavailable ou panne du store : on continue avec la session par défaut
            if not isinstance(exc, CreatorSessionUnavailable):
                exc = CreatorSessionUnavailable(creator_id, str(exc))
            log.warning("%s, utilisation de la session par défaut", exc)
            return {}
        log.debug("Session du créateur %s obtenue", creator_id)
        return options

    async def _resolve_members(self, source_id: str, creator_id: str, log) -> List[IdentityMapping]:
        members = [m for m in await self.storage.get_memberships(source_id) if m != creator_id]
        log.info("Invitation des membres: %s", members)
        mappings = await asyncio.gather(*(self.storage.get_mapping(m, EntityType.USER) for m in members))
        for member, mapping in zip(members, mappings):
            if mapping is None:
                log.debug("Membre %s sans correspondance Matrix, ignoré", member)
        return [m for m in mappings if m is not None]

    async def _invite_and_join(self, source_id: str, room_id: str, mapping: IdentityMapping, options: SessionOptions, log):
        try:
            log_http(log, "Invitation du membre %s alias %s", mapping.source_id, mapping.matrix_id)
            await self.client.invite(room_id, mapping.matrix_id, options)
            if not mapping.access_token:
                log.warning("Aucun access token pour %s, invitation non acceptée", mapping.matrix_id)
                return
            log_http(log, "Acceptation de l'invitation pour %s alias %s", mapping.source_id, mapping.matrix_id)
            await self.client.join(room_id, mapping.access_token)
        except Exception as exc:
            raise InviteOrJoinFailed(source_id, room_id, mapping.source_id) from exc
        log.debug("%s a rejoint %s", mapping.matrix_id, room_id)


__all__ = ["RoomProvisioner"]
