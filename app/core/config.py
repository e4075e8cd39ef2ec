from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BUSINESS_NAME: str = "Sasha K Makeup"
    OWNER_NAME: str = "Sasha"
    BUSINESS_LOCATION: str = "Studio near Downtown, 125 Bloom St, Suite 3B"
    CONTACT_EMAIL: str = "bookings@sashakmakeup.com"
    BUSINESS_PHONE: str | None = None
    BUSINESS_TIMEZONE: str = "America/Los_Angeles"

    # Open Tue-Sun 10:00-18:00 (closed Mondays); 0=Sunday
    WORKING_HOURS_OPEN: str = "10:00"
    WORKING_HOURS_CLOSE: str = "18:00"
    WORKING_DAYS_OPEN: list[int] = [2, 3, 4, 5, 6, 0]
    SLOT_MINUTES: int = 30
    BLACKOUT_DATES: list[str] = []

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    STORE_PROVIDER: str = "json"  # "json" | "memory"
    DATA_DIR: str = "./data"
    REPLY_DELAY_MS: int = 300


settings = Settings()
