from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Storage mode: "mongodb" or "local"
    STORAGE_MODE: str = "local"

    # MongoDB Configuration (only needed if STORAGE_MODE=mongodb)
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "reel_places_db"

    # Local JSON storage (only needed if STORAGE_MODE=local)
    LOCAL_DATA_DIR: str = "data"

    LOGGER: int = 20
    LOG_DIRECTORY: str = "logs"
    LOG_FILE: str = "app.log"

    # LLM Provider Selection
    LLM_PROVIDER: str = "anthropic"  # Options: anthropic, openai, mistral, groq
    LLM_MAX_TOKENS: int = 1024
    LLM_TIMEOUT: float = 30.0

    # Anthropic Configuration
    ANTHROPIC_API_KEY: str = "your-key-here"
    ANTHROPIC_MODEL: str = "claude-sonnet-4-20250514"

    # OpenAI Configuration
    OPENAI_API_KEY: str = "your-key-here"
    OPENAI_MODEL: str = "gpt-4o-mini"

    # Mistral Configuration
    MISTRAL_API_KEY: str = "your-key-here"
    MISTRAL_MODEL: str = "mistral-small-latest"

    # Groq Configuration
    GROQ_API_KEY: str = "your-key-here"
    GROQ_MODEL: str = "llama-3.1-8b-instant"

    # Geocoding: providers are tried in this order.
    # From the environment: GEOCODER_CHAIN=["nominatim"] (JSON array)
    GEOCODER_CHAIN: list[str] = ["kakao", "nominatim"]
    GEOCODE_TIMEOUT: float = 5.0

    # Kakao Local API (primary, Korean addresses)
    KAKAO_REST_API_KEY: str = ""
    KAKAO_KEYWORD_URL: str = "https://dapi.kakao.com/v2/local/search/keyword.json"
    KAKAO_ADDRESS_URL: str = "https://dapi.kakao.com/v2/local/search/address.json"

    # Nominatim (fallback, global). Usage policy requires an identifying User-Agent.
    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org/search"
    NOMINATIM_USER_AGENT: str = "ReelPlacesBot/1.0"
    NOMINATIM_EMAIL: str | None = None

    # Categories the extractor may assign (JSON array in the environment)
    PLACE_CATEGORIES: list[str] = [
        "korean",
        "chinese",
        "japanese",
        "western",
        "asian",
        "cafe",
        "bakery",
        "bar",
        "fast_food",
        "other",
    ]
    DEFAULT_CATEGORY: str = "other"

    # Placeholder owner for every saved place until authentication exists
    DEFAULT_USER_ID: str = "00000000-0000-0000-0000-000000000000"

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
