"""
Configuration settings for CafeOps.

Module-level constants, each overridable through an environment variable
(read once, at import time).
"""

import os
from pathlib import Path
from typing import Dict

from CafeOPS.domain.types import MenuCategory, Station

# Base directory (racine du dépôt)
ROOT_DIR = Path(__file__).resolve().parent.parent

# Persistance : un fichier JSON par clé dans DATA_DIR
DATA_DIR = Path(os.getenv("CAFEOPS_DATA_DIR", str(ROOT_DIR / "data")))
STORAGE_KEY = os.getenv("CAFEOPS_STORAGE_KEY", "agentic-cafe-pos")

# Jeu de données initial optionnel (JSON au format PosState), sinon seed intégré
SEED_FILE = os.getenv("CAFEOPS_SEED_FILE") or None

# Logging
LOG_LEVEL = os.getenv("CAFEOPS_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Affichage console
CURRENCY_SYMBOL = os.getenv("CAFEOPS_CURRENCY", "$")

# Poste de préparation par défaut selon la catégorie de l'article
STATION_BY_CATEGORY: Dict[MenuCategory, Station] = {
    MenuCategory.COFFEE: Station.BAR,
    MenuCategory.TEA: Station.BAR,
    MenuCategory.PASTRY: Station.PASTRY,
    MenuCategory.FOOD: Station.KITCHEN,
    MenuCategory.OTHER: Station.KITCHEN,
}
