from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    COMPANY_NAME: str = "Worktop Quotations"
    CURRENCY_SYMBOL: str = "€"
    LOG_LEVEL: str = "INFO"

    # Download names
    CSV_FILENAME: str = "worktop_quotes.csv"
    PDF_FILENAME: str = "worktop_quotes.pdf"

    class Config:
        env_file = ".env"


settings = Settings()
