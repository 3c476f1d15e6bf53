"""
Lecture de l'export Rocket.Chat (dump MongoDB, un document JSON par ligne).
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator, List

from core.rooms.models import SourceRoom

logger = logging.getLogger(__name__)


def iter_documents(path: str | Path) -> Iterator[dict]:
    with open(path, encoding="utf-8") as fh:
        for lineno, line in enumerate(fh, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"{path}:{lineno}: JSON invalide ({e.msg})") from e


def load_rooms(path: str | Path) -> List[SourceRoom]:
    rooms = [SourceRoom.from_export(doc) for doc in iter_documents(path)]
    logger.info("%s rooms lues depuis %s", len(rooms), path)
    return rooms


__all__ = ["iter_documents", "load_rooms"]
