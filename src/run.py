"""
Entrée principale de la migration des rooms Rocket.Chat vers Matrix.

Ce script garantit que le dossier courant est ajouté à sys.path pour permettre les imports absolus
(core, db, views), même si le lancement se fait via `python src/run.py`.
"""
from __future__ import annotations

import asyncio
import os
import sys

 # Ajoute dynamiquement le répertoire courant à sys.path si nécessaire
_CURRENT_DIR = os.path.dirname(__file__)
if _CURRENT_DIR not in sys.path:
    sys.path.insert(0, _CURRENT_DIR)

from core.logging_config import setup_logging  # noqa: E402
setup_logging()  # Initialise le logging global

from core import config, db  # noqa: E402
from core.export import load_rooms  # noqa: E402
from core.migration import migrate_rooms  # noqa: E402
from core.rooms.provisioner import RoomProvisioner  # noqa: E402
from core.storage import Storage  # noqa: E402
from core.synapse import SynapseClient  # noqa: E402
from views import report as report_view  # noqa: E402


async def main(rooms_file: str = config.ROOMS_FILE) -> int:
    if not os.path.exists(rooms_file):
        print(report_view.build_no_export(rooms_file))
        return 1
    rooms = load_rooms(rooms_file)
    pool = await db.get_pool(config.DATABASE_URL)
    try:
        await db.ensure_schema(pool)
        storage = Storage(pool)
        async with SynapseClient() as client:
            provisioner = RoomProvisioner(client, storage)
            report = await migrate_rooms(rooms, provisioner, storage)
    finally:
        await db.close_pool()
    print(report_view.build_summary(report))
    return 0 if report.failed == 0 else 2


def cli() -> None:
    # Vérifie la présence des paramètres obligatoires
    if not config.SYNAPSE_AS_TOKEN:
        raise SystemExit("SYNAPSE_AS_TOKEN manquant")
    if not config.DATABASE_URL:
        raise SystemExit("DATABASE_URL manquant")
    try:
        sys.exit(asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else config.ROOMS_FILE)))
    except KeyboardInterrupt:
        print("Arrêt manuel")
        sys.exit(0)


# Démarre la migration si le script est exécuté directement
if __name__ == "__main__":
    cli()
