"""
Client HTTP pour l'API client-server Matrix (Synapse).

Principes :
- Une seule `aiohttp.ClientSession` par client, authentifiée par défaut avec le token administrateur
- Options par appel (`{"headers": {...}}`) pour agir au nom d'un utilisateur précis
- Toute réponse HTTP >= 400 ou erreur réseau devient une `SynapseAPIError`
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import aiohttp
from aiohttp import ClientTimeout

from core import config
from core.rooms.errors import CreatorSessionUnavailable
from core.rooms.models import EntityType, WireRoom

logger = logging.getLogger(__name__)

CLIENT_API = "/_matrix/client/v3"

SessionOptions = Dict[str, Any]


class SynapseAPIError(Exception):
    """Erreur renvoyée par le homeserver ou erreur réseau."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


def bearer_options(access_token: str) -> SessionOptions:
    return {"headers": {"Authorization": f"Bearer {access_token}"}}


async def get_user_session_options(storage, user_id: str) -> SessionOptions:
    """
    Options de requête permettant d'agir en tant que `user_id` (identifiant Rocket.Chat).

    Raises :
        CreatorSessionUnavailable : identité vide, sans correspondance ou sans token
    """
    if not user_id:
        raise CreatorSessionUnavailable(user_id, "identité vide")
    mapping = await storage.get_mapping(user_id, EntityType.USER)
    if mapping is None:
        raise CreatorSessionUnavailable(user_id)
    if not mapping.access_token:
        raise CreatorSessionUnavailable(user_id, "aucun access token")
    return bearer_options(mapping.access_token)


class SynapseClient:
    def __init__(self, base_url: Optional[str] = None, access_token: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or config.SYNAPSE_URL).rstrip("/")
        self.access_token = access_token if access_token is not None else config.SYNAPSE_AS_TOKEN
        self.timeout = ClientTimeout(total=timeout or config.HTTP_TIMEOUT)
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "SynapseClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def post(self, path: str, body: Dict[str, Any], options: Optional[SessionOptions] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        headers.update((options or {}).get("headers", {}))

        try:
            async with self._get_session().post(url, json=body, headers=headers) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    logger.error("Erreur Synapse %s sur %s: %s", response.status, path, error_text)
                    raise SynapseAPIError(f"Requête {path} échouée: {response.status} {error_text}", response.status)
                return await response.json()
        except aiohttp.ClientError as e:
            logger.error("Erreur client HTTP: %s", e)
            raise SynapseAPIError(f"Erreur réseau: {e}") from e

    async def create_room(self, room: WireRoom, options: Optional[SessionOptions] = None) -> str:
        data = await self.post(f"{CLIENT_API}/createRoom", room.to_json(), options)
        room_id = data.get("room_id")
        if not room_id:
            raise SynapseAPIError("Réponse createRoom sans room_id")
        return room_id

    async def invite(self, room_id: str, matrix_id: str, options: Optional[SessionOptions] = None) -> None:
        await self.post(f"{CLIENT_API}/rooms/{quote(room_id, safe='')}/invite", {"user_id": matrix_id}, options)

    async def join(self, room_id: str, access_token: str) -> None:
        await self.post(f"{CLIENT_API}/join/{quote(room_id, safe='')}", {}, bearer_options(access_token))


__all__ = ["SynapseClient", "SynapseAPIError", "SessionOptions", "get_user_session_options", "bearer_options"]
