"""Configuration models."""

from pathlib import Path
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from finformatter.core.enums import ProviderName


class ProviderConfig(BaseModel):
    """One AI provider entry in the fallback chain."""

    provider: str = Field(..., min_length=1)
    model_name: str = Field(..., min_length=1)
    api_key: str = Field(default="", repr=False)
    enabled: bool = True

    @property
    def is_active(self) -> bool:
        """Enabled and carrying a non-blank credential."""
        return self.enabled and bool(self.api_key.strip())

    model_config = {
        "json_schema_extra": {
            "example": {
                "provider": "glm",
                "model_name": "glm-4-flash",
                "api_key": "sk-...",
                "enabled": True,
            }
        }
    }


class Config(BaseSettings):
    """Main application configuration from environment variables."""

    # Zhipu GLM (OpenAI-compatible chat completions)
    glm_api_key: Optional[str] = Field(default=None)
    glm_model: str = "glm-4-flash"
    glm_enabled: bool = True

    # DeepSeek (OpenAI-compatible chat completions)
    deepseek_api_key: Optional[str] = Field(default=None)
    deepseek_model: str = "deepseek-chat"
    deepseek_enabled: bool = False

    # Google Gemini
    google_api_key: Optional[str] = Field(default=None)
    gemini_model: str = "gemini-1.5-flash"
    gemini_enabled: bool = False

    # Fallback priority, first entry is tried first
    provider_order: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [p.value for p in ProviderName]
    )

    # Analysis
    request_timeout_sec: float = Field(default=120.0, gt=0)
    min_text_length: int = Field(default=20, ge=1)
    default_journal: str = "erj"

    # Persisted user settings (API keys edited through the CLI)
    settings_file: Path = Path("./finformatter_settings.yaml")
    journals_file: Optional[Path] = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"
    log_dir: Optional[Path] = None

    # Output
    output_dir: Path = Path("./out")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("provider_order", mode="before")
    @classmethod
    def split_provider_order(cls, v):
        """Accept a comma-separated string (e.g. ``PROVIDER_ORDER=gemini,glm``)."""
        if isinstance(v, str):
            return [p.strip().lower() for p in v.split(",") if p.strip()]
        return v

    def provider_defaults(self) -> Dict[str, ProviderConfig]:
        """Provider entries as configured through the environment."""
        return {
            ProviderName.GLM.value: ProviderConfig(
                provider=ProviderName.GLM.value,
                model_name=self.glm_model,
                api_key=self.glm_api_key or "",
                enabled=self.glm_enabled,
            ),
            ProviderName.DEEPSEEK.value: ProviderConfig(
                provider=ProviderName.DEEPSEEK.value,
                model_name=self.deepseek_model,
                api_key=self.deepseek_api_key or "",
                enabled=self.deepseek_enabled,
            ),
            ProviderName.GEMINI.value: ProviderConfig(
                provider=ProviderName.GEMINI.value,
                model_name=self.gemini_model,
                api_key=self.google_api_key or "",
                enabled=self.gemini_enabled,
            ),
        }

    def validate_paths(self) -> None:
        """Create output and log directories."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)
