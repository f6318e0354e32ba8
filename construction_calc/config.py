from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./construction_calc.db"
    APP_NAME: str = "Construction Cost Calculator"

    # Auth: bearer tokens issued on email login
    JWT_SECRET: str = ""  # REQUIRED in production — fail loudly if missing at auth time
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_EXPIRE_MINUTES: int = 60 * 24

    # Free tier
    FREE_LIMIT: int = 3

    # Dry-volume factors (wet/compacted volume -> loose material volume)
    CONCRETE_DRY_FACTOR: float = 1.54
    MORTAR_DRY_FACTOR: float = 1.33
    PLASTER_THICKNESS_MM: float = 15.0

    # Paystack
    PAYSTACK_SECRET_KEY: str = ""
    PAYSTACK_BASE_URL: str = "https://api.paystack.co"
    PAYSTACK_CALLBACK_URL: str = ""
    SUBSCRIPTION_DAYS: int = 30
    CURRENCY: str = "KES"
    SUBSCRIPTION_PRICE: float = 100.0  # minimum accepted amount, in CURRENCY

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5500

    class Config:
        env_file = ".env"


settings = Settings()
