from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod
    LOG_LEVEL: str = "INFO"

    # --- Saved addresses (single JSON array on disk) ---
    # Relative paths resolve against the working directory uvicorn is launched from.
    CEPFORM_DATA_FILE: str = "data/saved-addresses.json"

    # --- Postal code lookup (ViaCEP) ---
    VIACEP_BASE_URL: str = "https://viacep.com.br"
    VIACEP_TIMEOUT_S: float = 10.0  # 0 disables the client timeout


settings = Settings()
