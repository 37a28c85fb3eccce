from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: str = "sqlite+pysqlite:///:memory:"
    layouts_path: Path = Path(__file__).resolve().parents[1] / "layouts.yaml"
    csv_encodings: list[str] = ["utf-8-sig", "latin-1"]
    history_limit: int = 50
    main_block_name: str = "Bloco Principal"
    annex_block_name: str = "Bloco Anexo"
    main_block_max_number: int = 200
    log_level: str = "INFO"


settings = Settings()
