from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class RefreshConfig:
    """
    Configuration for the ingredient catalog refresh.
    """

    items_url: str = os.getenv(
        "WYNN_ITEMS_URL", "https://api.wynncraft.com/v3/item/database?fullResult"
    )
    places_url: str = os.getenv(
        "WYNN_PLACES_URL",
        "https://raw.githubusercontent.com/Wynntils/Reference/main/locations/places.json",
    )
    output_dir: Path = Path(os.getenv("WYNN_CATALOG_DIR", str(_DATA_DIR)))
    output_filename: str = "ingredients.json"
    timeout: float = float(os.getenv("WYNN_HTTP_TIMEOUT", "30"))
    user_agent: str = "wynn-ingredients/1.0 (ingredient catalog refresh)"

    @property
    def catalog_path(self) -> Path:
        return self.output_dir / self.output_filename


DEFAULT_REFRESH_CONFIG = RefreshConfig()
