from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ENTITYGEN_", env_file=".env", extra="ignore")

    app_name: str = "entitygen"
    log_level: str = "INFO"

    entity_package: str = "app.entity"
    file_header: str = "Generated by entitygen. Do not edit by hand."

    type_config_path: str | None = None
    temp_dir: str | None = None

settings = Settings()
