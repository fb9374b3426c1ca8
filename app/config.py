import os
from typing import Optional

from pydantic import BaseModel

from app.exceptions import ConfigurationError


class Config(BaseModel):
    EXA_API_KEY: Optional[str] = None
    GROQ_API_KEY: Optional[str] = None
    EXA_BASE_URL: str = "https://api.exa.ai"
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    GROQ_MODEL: str = "llama-3.3-70b-versatile"
    REQUEST_TIMEOUT: float = 60.0
    LOG_LEVEL: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """
        Builds the configuration from the process environment. Only variables that
        are actually set override the defaults, so an unset optional variable keeps
        its default value while an unset credential stays ``None``.

        :return: A populated Config instance.
        :rtype: Config
        """
        values = {
            name: os.environ[name]
            for name in cls.model_fields
            if os.environ.get(name)
        }
        return cls(**values)

    def check_credentials(self) -> None:
        """
        Verifies both collaborator credentials are present.

        :raises ConfigurationError: naming the first credential which is not set.
        """
        for name in ("EXA_API_KEY", "GROQ_API_KEY"):
            if not getattr(self, name):
                raise ConfigurationError(f"{name} environment variable is not set")


config = Config.from_env()
