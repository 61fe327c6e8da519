from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the simplifier backend."""

    #----------------------------------------------------------
    # External API settings
    #----------------------------------------------------------
    use_external_image_api: bool = Field(
        default=True,
        description="If true, image prompts are sent to the external image generation API.",
    )

    external_image_api_id: str = Field(
        default="dall-e-3",
        description="Model identifier requested from the external image generation API.",
    )

    external_image_api_key: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices(
            "external_image_api_key",
            "SIMPLIFIER_EXTERNAL_IMAGE_API_KEY",
            "OPENAI_API_KEY",
        ),
        description="API key for authenticating with the external image generation service.",
    )

    external_image_api_base_url: Optional[str] = Field(
        default=None,
        description="Optional OpenAI-compatible endpoint. Leave empty for api.openai.com.",
    )

    #----------------------------------------------------------
    # Generation settings
    #----------------------------------------------------------
    image_size: str = Field(
        default="1024x1024",
        description="Square resolution requested for every generated image.",
    )
    image_quality: str = Field(
        default="standard",
        description="Quality tier requested for every generated image.",
    )
    enable_image_generation: bool = Field(
        default=True,
        description="Disable to answer every image request with an empty result.",
    )

    model_config = SettingsConfigDict(
        env_prefix="SIMPLIFIER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
