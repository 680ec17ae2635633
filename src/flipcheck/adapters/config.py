# src/flipcheck/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # Placeholder scores used when a deal carries none
    DEFAULT_RISK_SCORE: float = Field(default=50.0)
    DEFAULT_MARKET_SCORE: float = Field(default=70.0)

    # -----------------------------
    # Risk analytics
    # -----------------------------
    CURVE_MIN_PROFIT: float = Field(default=-50_000.0)
    CURVE_MAX_PROFIT: float = Field(default=200_000.0)
    CURVE_STEPS: int = Field(default=50)

    # min-ARV solver target
    DEFAULT_TARGET_PROFIT: float = Field(default=50_000.0)
    DELAY_COST_PER_DAY: float = Field(default=50.0)

    # -----------------------------
    # Exit strategies
    # -----------------------------
    BRRRR_REFI_PERCENT: float = Field(default=75.0)
    BRRRR_INTEREST_RATE: float = Field(default=0.07)
    BRRRR_TERM_YEARS: int = Field(default=30)
    BRRRR_CLOSING_COST_PCT: float = Field(default=0.03)
    BRRRR_EXPENSE_RATIO: float = Field(default=0.40)
    RENT_TO_VALUE: float = Field(default=0.008)
    WHOLESALE_ARV_FACTOR: float = Field(default=0.70)

    model_config = SettingsConfigDict(
        env_prefix="FLIPCHECK_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "BRRRR_INTEREST_RATE",
        "BRRRR_CLOSING_COST_PCT",
        "BRRRR_EXPENSE_RATIO",
        "RENT_TO_VALUE",
        "WHOLESALE_ARV_FACTOR",
        mode="before",
    )
    @classmethod
    def _to_non_negative_fraction(cls, v: Any) -> Any:
        if v is None:
            return v
        explicit_pct = False
        if isinstance(v, str):
            explicit_pct = "%" in v
            v = v.strip().replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("rate must be numeric or percent-like") from err
        if explicit_pct or f > 1.0:
            f = f / 100.0
        if f < 0:
            raise ValueError("rate must be non-negative")
        return f

    @field_validator("DEFAULT_RISK_SCORE", "DEFAULT_MARKET_SCORE", "BRRRR_REFI_PERCENT", mode="before")
    @classmethod
    def _zero_to_hundred(cls, v: Any) -> Any:
        f = float(v)
        if not 0 <= f <= 100:
            raise ValueError("value must be between 0 and 100")
        return f

    @field_validator("CURVE_STEPS", "BRRRR_TERM_YEARS", mode="before")
    @classmethod
    def _positive_int(cls, v: Any) -> Any:
        i = int(v)
        if i <= 0:
            raise ValueError("must be > 0")
        return i


config = AppConfig()
