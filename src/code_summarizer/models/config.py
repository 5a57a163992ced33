"""Configuration models for code-summarizer."""
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from code_summarizer.constants import DescriptionServiceDefaults


class SummarizerConfig(BaseModel):
    """Contents of a code-summarizer YAML config file.

    Attributes:
        url: Description service endpoint
        timeout_seconds: Per-request timeout for the description service
        max_attempts: Attempts per description request, including the first
    """

    url: Optional[str] = None
    timeout_seconds: float = Field(default=DescriptionServiceDefaults.TIMEOUT_SECONDS, gt=0)
    max_attempts: int = Field(default=DescriptionServiceDefaults.MAX_ATTEMPTS, ge=1)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        """Reject endpoints that are not http(s) URLs; blank means unset."""
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"url must start with http:// or https://, got '{v}'")
        return v
