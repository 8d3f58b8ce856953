"""
TL Payroll — Configuration via pydantic-settings
"""
from pydantic_settings import BaseSettings
from pydantic import Field, model_validator


class Settings(BaseSettings):
    # App
    environment: str = "production"
    debug: bool = False
    port: int = 8000
    app_version: str = "1.0.0"

    # Limits
    rate_limit: str = "60/minute"
    max_batch_size: int = Field(default=500, ge=1)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @model_validator(mode="after")
    def debug_outside_production(self):
        """Debug logging never runs in production"""
        if self.environment == "production":
            self.debug = False
        return self


settings = Settings()
