from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKDOCTOR_")

    app_name: str = "DeckDoctor"
    debug: bool = False
    log_level: str = "INFO"

    # Directory holding cards.json and the two stats tables
    data_dir: Path = PACKAGE_DATA_DIR

    cr_api_data_url: str = "https://royaleapi.github.io/cr-api-data/json"


settings = Settings()


# =============================================================================
# RUBRIC PARAMETERS
# =============================================================================

DECK_SIZE = 8

# (minimum score, grade), checked top-down; anything lower is an F
GRADE_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (90, "S"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
)

# Average elixir bands. Comparisons are strict: 4.0 and 2.5 still pass.
ELIXIR_CRITICAL_ABOVE = 4.5
ELIXIR_HEAVY_ABOVE = 4.0
ELIXIR_LIGHT_BELOW = 2.5

# More splash cards than this is flagged as redundant
MAX_SPLASH_CARDS = 3
