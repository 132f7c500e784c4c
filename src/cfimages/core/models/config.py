"""Client configuration model."""

from pydantic import BaseModel, ConfigDict, Field, SecretStr, model_validator

from cfimages.core.utils.constants import (
    CLOUDFLARE_API_BASE_URL,
    DEFAULT_CLIENT_TIMEOUT_SECONDS,
    IMAGES_PATH_TEMPLATE,
)


class ClientConfig(BaseModel):
    """Immutable configuration for ``ImagesClient``.

    Either ``account_id`` or an explicit ``base_url`` must be supplied.
    Values are plain inputs; loading them from the environment is the
    caller's job.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    account_id: str | None = Field(None, min_length=1, description="Cloudflare account ID")
    api_token: SecretStr = Field(..., description="API token with Images permissions")
    base_url: str | None = Field(
        None,
        min_length=1,
        description="Images endpoint root; overrides the URL derived from account_id",
    )
    timeout_seconds: float = Field(
        DEFAULT_CLIENT_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout applied to connect, read and write",
    )
    enable_logging: bool = Field(
        True,
        description="Log every HTTP request and response (HTTP traffic only)",
    )

    @model_validator(mode="after")
    def validate_target(self) -> "ClientConfig":
        """Ensure there is something to send requests to, with a credential."""
        if not self.account_id and not self.base_url:
            raise ValueError("Either account_id or base_url is required")
        if not self.api_token.get_secret_value().strip():
            raise ValueError("api_token must not be empty")
        return self

    @property
    def images_url(self) -> str:
        if self.base_url:
            return self.base_url.rstrip("/")
        path = IMAGES_PATH_TEMPLATE.format(account_id=self.account_id)
        return f"{CLOUDFLARE_API_BASE_URL}{path}"
