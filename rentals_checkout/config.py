from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from rentals_checkout.domain.value_objects.fee_schedule import FeeSchedule


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str | None = None  # e.g. sqlite+aiosqlite:///./checkout.db
    use_in_memory: bool = True

    backend_base_url: str = "http://localhost:8000"
    payments_api_base_url: str | None = None  # defaults to backend_base_url
    backend_api_token: str | None = Field(default=None, alias="BACKEND_API_TOKEN")
    backend_timeout_seconds: float = Field(default=10.0, ge=1, le=30)
    payment_provider: str = "gateway"

    currency_code: str = "PEN"
    cleaning_fee: Decimal = Decimal("50")
    service_fee_rate: Decimal = Decimal("0.10")
    tax_rate: Decimal = Decimal("0.18")
    default_stay_nights: int = Field(default=7, ge=1)

    default_return_location: str = "/bookings"
    return_location_cookie: str = "checkout_return_to"
    success_redirect_delay_seconds: float = 3.0

    def fee_schedule(self) -> FeeSchedule:
        return FeeSchedule(
            cleaning_fee=self.cleaning_fee,
            service_fee_rate=self.service_fee_rate,
            tax_rate=self.tax_rate,
            currency_code=self.currency_code,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
