"""
Erreurs du pipeline de migration des rooms.

Seule `CreatorSessionUnavailable` est récupérée localement (repli sur la session par défaut),
les autres remontent jusqu'à l'appelant de `RoomProvisioner.provision`.
"""
from __future__ import annotations

from typing import Optional


class MigrationError(Exception):
    """Base des erreurs de migration d'une room."""


class UnsupportedRoomType(MigrationError):
    def __init__(self, room_type, room_id: Optional[str] = None):
        self.room_type = room_type
        self.room_id = room_id
        super().__init__(f"Type de room {room_type} inconnu ou non implémenté")


class CreatorSessionUnavailable(MigrationError):
    def __init__(self, user_id: str, reason: str = "aucune correspondance"):
        self.user_id = user_id
        super().__init__(f"Session indisponible pour le créateur {user_id or '?'}: {reason}")


class MembershipRegistrationFailed(MigrationError):
    def __init__(self, room_id: str):
        self.room_id = room_id
        super().__init__(f"Enregistrement des membres échoué pour la room {room_id}")


class RoomCreationFailed(MigrationError):
    def __init__(self, room_id: str):
        self.room_id = room_id
        super().__init__(f"Création de la room {room_id} échouée")


class InviteOrJoinFailed(MigrationError):
    """La room existe déjà côté Matrix mais n'est que partiellement peuplée."""

    def __init__(self, room_id: str, matrix_room_id: str, member_id: Optional[str] = None):
        self.room_id = room_id
        self.matrix_room_id = matrix_room_id
        self.member_id = member_id
        who = f" (membre {member_id})" if member_id else ""
        super().__init__(f"Invitation/join échoué dans {matrix_room_id} pour la room {room_id}{who}")


__all__ = [
    "MigrationError", "UnsupportedRoomType", "CreatorSessionUnavailable",
    "MembershipRegistrationFailed", "RoomCreationFailed", "InviteOrJoinFailed",
]
