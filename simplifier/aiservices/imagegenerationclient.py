from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class ImageGenerationStatus(str, Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class ImageGenerationResult:
    """Outcome of a single image generation request."""

    status: ImageGenerationStatus
    url: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ImageGenerationStatus.SUCCESS

    @classmethod
    def success(cls, url: str) -> "ImageGenerationResult":
        return cls(status=ImageGenerationStatus.SUCCESS, url=url)

    @classmethod
    def empty(cls) -> "ImageGenerationResult":
        return cls(status=ImageGenerationStatus.EMPTY)

    @classmethod
    def failure(cls, error: str) -> "ImageGenerationResult":
        return cls(status=ImageGenerationStatus.ERROR, error=error)


class ImageGenerationClient(ABC):
    """Abstract interface for an image generation client.

    Implementations must provide a synchronous ``generate`` method that
    never raises: every failure is reported through the returned
    :class:`ImageGenerationResult`.
    """

    @abstractmethod
    def generate(self, prompt: str) -> ImageGenerationResult:
        """Generate an image from a prompt."""

    def generate_image(self, prompt: str) -> Optional[str]:
        """Return the image URL, or None when no image could be produced."""
        result = self.generate(prompt)
        return result.url if result.ok else None


class DisabledImageGenerationClient(ImageGenerationClient):
    """Answers every request with an empty result, without network access."""

    def generate(self, prompt: str) -> ImageGenerationResult:
        logger.info("Image generation is disabled; skipping prompt of %d chars", len(prompt))
        return ImageGenerationResult.empty()
