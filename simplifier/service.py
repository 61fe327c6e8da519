"""Wiring of the image client and the sentence store from configuration."""

from __future__ import annotations

import logging
from typing import Optional

from .aiservices.imagegenerationclient import (
    DisabledImageGenerationClient,
    ImageGenerationClient,
    ImageGenerationResult,
)
from .aiservices.openaiimagegenerationclient import OpenAIImageGenerationClient
from .config import Settings, get_settings
from .schemas import Sentence
from .storageservice.storageservice import StorageService

logger = logging.getLogger(__name__)


def build_image_generation_client(settings: Settings | None = None) -> ImageGenerationClient:
    settings = settings or get_settings()
    if not settings.enable_image_generation or not settings.use_external_image_api:
        logger.info("Image generation disabled by configuration")
        return DisabledImageGenerationClient()
    return OpenAIImageGenerationClient(settings)


def create_storage_service() -> StorageService:
    """Return a new, empty store. Every call builds an independent instance."""
    return StorageService()


class SimplifierService:
    """Holds the two collaborators handed to the request-handling layer.

    The store and the image client share no state; this class only owns
    their lifecycle.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        storage: StorageService | None = None,
        image_client: ImageGenerationClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.storage = storage if storage is not None else create_storage_service()
        self.image_client = image_client if image_client is not None else build_image_generation_client(self.settings)

    # ------------------------------------------------------------------
    # Image Generation
    # ------------------------------------------------------------------
    def generate_image(self, prompt: str) -> ImageGenerationResult:
        return self.image_client.generate(prompt)

    def generate_image_url(self, prompt: str) -> Optional[str]:
        return self.image_client.generate_image(prompt)

    # ------------------------------------------------------------------
    # Sentences
    # ------------------------------------------------------------------
    def lookup_simplification(self, complex_sentence: str, level: str) -> Optional[Sentence]:
        return self.storage.get_simplified_sentence(complex_sentence, level)

    def close(self) -> None:
        self.storage.close()

    def __enter__(self) -> "SimplifierService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
