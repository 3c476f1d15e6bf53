"""
Configuration centralisée du logging pour la migration.

Objectifs :
- Un seul setup idempotent (évite la duplication des handlers)
- Un niveau HTTP dédié aux appels vers le homeserver (entre DEBUG et INFO)
- Un champ `room` toujours présent, renseigné par les LoggerAdapter du pipeline
- Format uniforme configurable via variables d'environnement
"""
from __future__ import annotations

import logging
import os

_INITIALIZED = False

HTTP = 15
logging.addLevelName(HTTP, "HTTP")

DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_FORMAT = os.getenv("LOG_FORMAT", "[%(asctime)s] %(levelname)s %(name)s%(room)s: %(message)s")


class _RoomContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        # Les records émis hors pipeline n'ont pas d'attribut `room`
        room = getattr(record, "room", None)
        if room is None:
            record.room = ""
        elif not str(room).startswith(" "):
            record.room = f" [{room}]"
        return True


class RoomLoggerAdapter(logging.LoggerAdapter):
    """Adapter qui rattache l'identifiant de la room source à chaque message."""

    def process(self, msg, kwargs):
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("room", self.extra.get("room"))
        kwargs["extra"] = extra
        return msg, kwargs


def log_http(log: logging.Logger | logging.LoggerAdapter, msg: str, *args) -> None:
    log.log(HTTP, msg, *args)


def setup_logging(force: bool = False) -> None:
    global _INITIALIZED
    if _INITIALIZED and not force:
        return

    root = logging.getLogger()
    if force:
        # Purge tous les handlers existants
        for h in list(root.handlers):
            root.removeHandler(h)
    if not root.handlers:
        root.addHandler(logging.StreamHandler())
    # Uniformise le filtre, le format et le niveau de log
    for h in root.handlers:
        h.addFilter(_RoomContextFilter())
        h.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    level = logging.getLevelName(DEFAULT_LEVEL)
    root.setLevel(level if isinstance(level, int) else logging.INFO)
    # aiohttp est trop bavard au niveau DEBUG
    logging.getLogger("aiohttp").setLevel(max(root.level, logging.INFO))
    _INITIALIZED = True


__all__ = ["setup_logging", "RoomLoggerAdapter", "log_http", "HTTP"]
