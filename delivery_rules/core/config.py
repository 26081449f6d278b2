"""Engine configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime defaults for the delivery rule engine."""

    delivery_default_cutoff_time: str = getenv("DELIVERY_DEFAULT_CUTOFF_TIME", "23:59")
    delivery_date_window_days: int = int(getenv("DELIVERY_DATE_WINDOW_DAYS", "14"))
    # Policy for cutoff strings that do not parse; False means "cutoff already passed".
    delivery_invalid_cutoff_allows_same_day: bool = getenv("DELIVERY_INVALID_CUTOFF_ALLOWS_SAME_DAY", "0") == "1"
    checkout_min_phone_digits: int = int(getenv("CHECKOUT_MIN_PHONE_DIGITS", "7"))


settings: Settings = Settings()
