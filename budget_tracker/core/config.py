from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App settings
    PROJECT_NAME: str = "BudgetTracker"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # Storage ("json" for a local key-value file, "dynamo" for DynamoDB)
    STORAGE_BACKEND: str = Field(default="json")
    STORAGE_PATH: str = Field(default="data/transactions.json")
    STORAGE_KEY: str = Field(default="financeTransactions")

    # DynamoDB
    DYNAMO_REGION: str = Field(default="eu-west-1")
    DYNAMO_TRANSACTIONS_TABLE: str = Field(default="budget-tracker-transactions")

    # Analytics
    TIMEZONE: str = Field(default="UTC")
    DEFAULT_TREND_MONTHS: int = 3
    MONTHLY_HISTORY_LIMIT: int = 6

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()
