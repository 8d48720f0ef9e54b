from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from app.models.config import SignatureCheck, StoreBackend
from app.utils.filesystem import get_project_root


class Settings(BaseSettings):
    debug: bool = True
    port: int = 4000
    public_base_url: Optional[str] = None
    oxapay_api_key: Optional[str] = None
    oxapay_merchant_id: Optional[str] = None
    oxapay_base_url: str = "https://api.oxapay.com"
    oxapay_callback_secret: Optional[str] = None
    oxapay_invoice_timeout: float = 10
    telegram_bot_token: Optional[str] = None
    telegram_admin_chat_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("telegram_admin_chat_id", "admin_chat_id")
    )
    store_backend: StoreBackend = StoreBackend.MEMORY
    redis_host: str = "localhost"
    redis_port: int = 6379
    sentry_dsn: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=get_project_root() / ".env",
        yaml_file=get_project_root() / "config.yaml",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, dotenv_settings, YamlConfigSettingsSource(settings_cls)

    @property
    def signature_check(self) -> SignatureCheck:
        return SignatureCheck.ENFORCED if self.oxapay_callback_secret else SignatureCheck.DISABLED

    @property
    def callback_url(self) -> str:
        return f"{(self.public_base_url or '').rstrip('/')}/api/oxapay/webhook"

    @property
    def success_url(self) -> str:
        return f"{(self.public_base_url or '').rstrip('/')}/payment/success"

    @property
    def cancel_url(self) -> str:
        return f"{(self.public_base_url or '').rstrip('/')}/payment/cancel"


settings = Settings()
