"""
Configuration centrale de la migration Rocket.Chat -> Matrix.

Ce module charge les variables d'environnement (.env) et prépare :
- L'URL du homeserver Synapse (SYNAPSE_URL)
- Le token administrateur / application service (SYNAPSE_AS_TOKEN, obligatoire)
- L'URL de la base de données des correspondances (DATABASE_URL, obligatoire)
- Le dossier contenant l'export Rocket.Chat (EXPORT_DIR)

Un warning est émis si un paramètre obligatoire est absent pour détecter le problème avant le lancement.
"""
from __future__ import annotations

import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

SYNAPSE_URL = (os.getenv("SYNAPSE_URL") or "http://localhost:8008").rstrip("/")
SYNAPSE_AS_TOKEN = os.getenv("SYNAPSE_AS_TOKEN")
DATABASE_URL = os.getenv("DATABASE_URL")

EXPORT_DIR = os.getenv("EXPORT_DIR", "inputs")
ROOMS_FILE = os.path.join(EXPORT_DIR, "rocketchat_room.json")

try:
    HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "30"))
except ValueError:
    logger.warning("HTTP_TIMEOUT invalide, utilisation de 30s")
    HTTP_TIMEOUT = 30.0


# Avertit si les paramètres obligatoires sont absents
if not SYNAPSE_AS_TOKEN:
    logger.warning("SYNAPSE_AS_TOKEN manquant dans l'environnement")
if not DATABASE_URL:
    logger.warning("DATABASE_URL manquant dans l'environnement")
