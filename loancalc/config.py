from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "LOANCALC_"}

    # Hard limits (blocking validation)
    max_principal: Decimal = Decimal("100000000")
    max_term_months: int = 600  # 50 years

    # Advisory thresholds (non-blocking, reported as warnings)
    large_loan_threshold: Decimal = Decimal("1000000")  # Interest-only balloon risk
    near_zero_rate: Decimal = Decimal("0.01")  # Percent; interest-only below this is flagged
    interest_only_max_term_months: int = 360
    simple_interest_max_term_months: int = 120
    amortized_min_term_months: int = 12


settings = Settings()
