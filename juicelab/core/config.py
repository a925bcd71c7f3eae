from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "JuiceLab Loyalty"

    # SQLite по умолчанию. Потом заменим на PostgreSQL.
    DATABASE_URL: str = "sqlite:///./juicelab.db"
    SQL_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    # Базовый адрес витрины для реферальных ссылок
    SITE_URL: str = "http://localhost:3000"

    # --- Referral / Bonus rules ---
    WELCOME_BONUS: int = 10
    REFERRAL_SIGNUP_BONUS: int = 10
    REFERRAL_FIRST_ORDER_BONUS: int = 10

    # % от суммы заказа, который можно оплатить бонусами
    MAX_BONUS_PERCENT: int = 10

    REFERRAL_CODE_LENGTH: int = 8

    # Токен для админских эндпоинтов (начисление/списание вручную, статусы заказов).
    # Пустой токен: админские эндпоинты закрыты, пока ADMIN_TOKEN не задан в .env
    ADMIN_TOKEN: str = ""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
