from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Poha Mill Financial Planner"
    COMPANY_NAME: str = ""
    LOG_LEVEL: str = "INFO"

    # Sensitivity scan: percent change around the base value
    SENSITIVITY_STEP_PCT: int = 2
    SENSITIVITY_DEFAULT_LOW_PCT: int = -20
    SENSITIVITY_DEFAULT_HIGH_PCT: int = 20
    SENSITIVITY_MAX_POINTS: int = 501

    # Breakeven chart
    BREAKEVEN_CHART_POINTS: int = 50
    BREAKEVEN_CHART_HEADROOM: float = 1.5

    EXPORT_FILENAME_PREFIX: str = "poha-manufacturing-analysis"

    # In-memory scenario sessions (lost on restart)
    MAX_SCENARIOS: int = 256

    class Config:
        env_file = ".env"


settings = Settings()
