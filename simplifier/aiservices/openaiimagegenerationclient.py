# aiservices/openaiimagegenerationclient.py
from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from openai import OpenAI

from ..config import Settings, get_settings
from .imagegenerationclient import ImageGenerationClient, ImageGenerationResult

logger = logging.getLogger(__name__)


class OpenAIImageGenerationClient(ImageGenerationClient):
    """
    Works with:
      - api.openai.com (native)
      - any OpenAI-compatible images endpoint (set base_url)
    """

    def __init__(self, settings: Optional[Settings] = None, client: Any = None) -> None:
        self.settings = settings or get_settings()

        # Built on first use so a missing key surfaces as a failed result
        self._client = client
        self._client_lock = threading.Lock()

        self._model = self.settings.external_image_api_id
        self._size = self.settings.image_size
        self._quality = self.settings.image_quality

    # --- Image generation -----------------------------------------------------

    def generate(self, prompt: str) -> ImageGenerationResult:
        params = {
            "model": self._model,
            "prompt": prompt,
            "n": 1,
            "size": self._size,
            "quality": self._quality,
        }

        try:
            resp = self._get_client().images.generate(**params)
        except Exception as exc:
            logger.exception("Error generating image with model '%s'", self._model)
            return ImageGenerationResult.failure(str(exc) or type(exc).__name__)

        url = self._first_url(resp)
        if url is None:
            logger.warning("Image service returned no image URL for model '%s'", self._model)
            return ImageGenerationResult.empty()
        return ImageGenerationResult.success(url)

    # --- Internals ------------------------------------------------------------

    def _get_client(self) -> Any:
        if self._client is not None:
            return self._client
        with self._client_lock:
            if self._client is None:
                api_key = self.settings.external_image_api_key.get_secret_value()
                base_url = self.settings.external_image_api_base_url
                # OpenAI() without a key falls back to OPENAI_API_KEY and raises if unset
                self._client = OpenAI(
                    api_key=api_key or None,
                    base_url=base_url,
                )
        return self._client

    @staticmethod
    def _first_url(resp: Any) -> Optional[str]:
        data = getattr(resp, "data", None)
        if not data:
            return None
        return getattr(data[0], "url", None) or None
