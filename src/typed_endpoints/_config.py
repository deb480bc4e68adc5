import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator

from ._utils.constants import (
    DEFAULT_TIMEOUT,
    DOTENV_FILE,
    ENV_BASE_URL,
    ENV_FOLLOW_REDIRECTS,
    ENV_TIMEOUT,
    ENV_VERIFY_SSL,
)

_FALSE_VALUES = {"0", "false", "no", "off"}
_HTTP_URL = TypeAdapter(HttpUrl)


class ClientConfig(BaseModel):
    base_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    follow_redirects: bool = True
    verify_ssl: bool = True
    headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("base_url", mode="before")
    @classmethod
    def validate_base_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return None
        # only validated, the original spelling (trailing slash included) is kept
        _HTTP_URL.validate_python(value)
        return value

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "ClientConfig":
        """Build a configuration from ``TYPED_ENDPOINTS_*`` environment variables.

        An optional ``.env`` file is loaded first; variables already present in
        the environment take precedence over it.
        """
        load_dotenv(dotenv_path=dotenv_path or os.path.join(os.getcwd(), DOTENV_FILE))

        values: dict[str, object] = {}
        if base_url := os.environ.get(ENV_BASE_URL):
            values["base_url"] = base_url
        if timeout := os.environ.get(ENV_TIMEOUT):
            values["timeout"] = float(timeout)
        if follow_redirects := os.environ.get(ENV_FOLLOW_REDIRECTS):
            values["follow_redirects"] = follow_redirects.lower() not in _FALSE_VALUES
        if verify_ssl := os.environ.get(ENV_VERIFY_SSL):
            values["verify_ssl"] = verify_ssl.lower() not in _FALSE_VALUES
        return cls.model_validate(values)
