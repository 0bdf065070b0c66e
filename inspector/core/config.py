import os
from pydantic import BaseModel, field_validator
from dotenv import load_dotenv
load_dotenv()

class Cfg(BaseModel):
    APP_PORT: int = int(os.getenv("APP_PORT", 8000))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Timeout for calls made through the docker SDK (seconds)
    DOCKER_TIMEOUT_S: int = int(os.getenv("DOCKER_TIMEOUT_S", 15))

    @field_validator('APP_PORT')
    @classmethod
    def validate_app_port(cls, v):
        if not (1 <= v <= 65535):
            raise ValueError('APP_PORT must be between 1-65535')
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f'LOG_LEVEL must be one of: {", ".join(valid_levels)}')
        return v

    @field_validator('DOCKER_TIMEOUT_S')
    @classmethod
    def validate_docker_timeout(cls, v):
        if v <= 0:
            raise ValueError('DOCKER_TIMEOUT_S must be > 0')
        return v

cfg = Cfg()
