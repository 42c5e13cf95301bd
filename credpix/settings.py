from pydantic_settings import BaseSettings, SettingsConfigDict

QRSERVER_URL = "https://api.qrserver.com/v1/create-qr-code/?size=300x300&data="


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="CREDPIX_", extra="ignore")

    pix_key: str = ""
    pix_merchant_name: str = ""
    pix_merchant_city: str = ""

    qr_service_url: str = QRSERVER_URL
    qr_box_size: int = 10
    qr_border: int = 2

    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
