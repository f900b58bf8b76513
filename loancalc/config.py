from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "LOANCALC_"}

    # CLI defaults
    default_loan: Decimal = Decimal("4350000")
    default_interest_pct: Decimal = Decimal("1.25")  # Nominal, percent per year
    default_terms_per_year: int = 12
    default_years: int = 30
    default_fee: Decimal = Decimal("45")  # Per installment
    default_due_day: str = "20"
    default_extra_amount: Decimal = Decimal("6000")

    # Remote API (used by `loancalc --remote` and the dashboard)
    api_base_url: str = "http://localhost:8000"

    # Chart
    chart_width: int = 1240
    chart_height: int = 1028

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
