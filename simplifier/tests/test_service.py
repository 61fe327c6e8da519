"""Tests for configuration loading and service wiring."""

from __future__ import annotations

import pytest

from simplifier.aiservices.imagegenerationclient import (
    DisabledImageGenerationClient,
    ImageGenerationClient,
    ImageGenerationResult,
)
from simplifier.aiservices.openaiimagegenerationclient import OpenAIImageGenerationClient
from simplifier.config import Settings
from simplifier.schemas import InsertSentence
from simplifier.service import SimplifierService, build_image_generation_client, create_storage_service


class _StubImageClient(ImageGenerationClient):
    def __init__(self, result: ImageGenerationResult) -> None:
        self.result = result
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> ImageGenerationResult:
        self.prompts.append(prompt)
        return self.result


def test_settings_read_openai_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SIMPLIFIER_EXTERNAL_IMAGE_API_KEY", raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")

    settings = Settings(_env_file=None)

    assert settings.external_image_api_key.get_secret_value() == "sk-from-env"


def test_settings_use_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIMPLIFIER_IMAGE_QUALITY", "hd")
    monkeypatch.setenv("SIMPLIFIER_ENABLE_IMAGE_GENERATION", "false")

    settings = Settings(_env_file=None)

    assert settings.image_quality == "hd"
    assert settings.enable_image_generation is False


def test_build_image_generation_client_follows_settings() -> None:
    enabled = Settings(_env_file=None, external_image_api_key="k")
    disabled = Settings(_env_file=None, enable_image_generation=False)

    assert isinstance(build_image_generation_client(enabled), OpenAIImageGenerationClient)
    assert isinstance(build_image_generation_client(disabled), DisabledImageGenerationClient)


def test_create_storage_service_returns_independent_instances() -> None:
    first = create_storage_service()
    second = create_storage_service()

    first.insert_sentence(InsertSentence(complex_sentence="Only in the first store."))

    assert first is not second
    assert second.get_all_sentences() == []


def test_service_delegates_to_collaborators() -> None:
    stub = _StubImageClient(ImageGenerationResult.success("https://img.example/x.png"))
    settings = Settings(_env_file=None)

    with SimplifierService(settings, image_client=stub) as service:
        stored = service.storage.insert_sentence(
            {"complex_sentence": "The ramifications were considerable.", "simplified_sentence": "It mattered a lot."}
        )

        assert service.generate_image_url("a lighthouse") == "https://img.example/x.png"
        assert service.generate_image("a lighthouse").ok
        assert stub.prompts == ["a lighthouse", "a lighthouse"]
        assert service.lookup_simplification("The ramifications were considerable", "easy") == stored

    assert service.storage.get_all_sentences() == []


def test_service_surfaces_empty_result_as_none() -> None:
    service = SimplifierService(
        Settings(_env_file=None),
        storage=create_storage_service(),
        image_client=_StubImageClient(ImageGenerationResult.empty()),
    )

    assert service.generate_image_url("prompt") is None
