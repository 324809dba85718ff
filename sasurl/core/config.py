from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "sasurl"
    app_env: str = "development"
    app_port: int = 10724

    log_level: str = "INFO"
    log_json: bool = False

    admin_api_key: str = ""

    # Azure Blob Storage account
    azure_storage_account: str = ""
    azure_storage_access_key: str = ""
    azure_storage_blob_endpoint: str = ""  # e.g. "http://127.0.0.1:10000/devstoreaccount1" for Azurite

    # Signed URL issuance
    sas_container: str = ""
    sas_read_ttl: str = "1h"
    sas_write_ttl: str = "15m"
    sas_mount_path: str = "/static"
    sas_cdn_endpoint_name: str = ""  # rewrites read URLs to <name>.azureedge.net

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    def storage_credentials(self) -> dict[str, str] | None:
        if not (self.azure_storage_account or self.azure_storage_access_key):
            return None
        return {
            "account_name": self.azure_storage_account,
            "account_key": self.azure_storage_access_key,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
