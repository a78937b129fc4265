# =============================================================================
# lib/embeddings.py - Artwork Embedding Provider
# =============================================================================
# Produces embeddings for artwork metadata. Text embeddings come from OpenAI
# when OPENAI_API_KEY is configured; without a key every call returns None
# and taste updates fall back to like counters.
#
# Image embeddings are not produced yet.
#
# Usage:
#   from lib.embeddings import EmbeddingProvider
#   vector = EmbeddingProvider().get_artwork_text_embedding(artwork)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Mapping

from openai import OpenAI

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

# Metadata fields concatenated into the embedding text, in order
TEXT_FIELDS = ("title", "medium", "story")


class EmbeddingError(ApplicationError):
    """Raised when the embedding API call fails."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="EMBEDDING_FAILED", **kwargs)


def artwork_embedding_text(artwork: Mapping[str, Any]) -> str:
    """Join non-empty title / medium / story into one document."""
    parts = [str(artwork.get(field)).strip() for field in TEXT_FIELDS if artwork.get(field)]
    return "\n".join(part for part in parts if part)


class EmbeddingProvider:
    """
    Embedding provider backed by the OpenAI embeddings API.

    Example:
        provider = EmbeddingProvider()
        if provider.enabled:
            vec = provider.get_text_embedding("Oil on linen, 2021")
    """

    def __init__(self, api_key: str | None = None, model: str | None = None):
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_EMBEDDING_MODEL
        self.client = OpenAI(api_key=self.api_key) if self.api_key else None

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def get_text_embedding(self, text: str) -> list[float] | None:
        """
        Embed a text document.

        Returns None when the provider is disabled or the text is blank.

        Raises:
            EmbeddingError: If the API call fails
        """
        if not self.enabled or not text.strip():
            return None

        try:
            response = self.client.embeddings.create(model=self.model, input=text)
        except Exception as e:
            raise EmbeddingError(
                message=f"OpenAI embeddings call failed: {e}",
                suggestion="Check OPENAI_API_KEY and OPENAI_EMBEDDING_MODEL",
                details={"model": self.model},
            )

        vector = list(response.data[0].embedding)
        logger.debug(f"Embedded {len(text)} chars into {len(vector)} dims")
        return vector

    def get_artwork_text_embedding(self, artwork: Mapping[str, Any]) -> list[float] | None:
        return self.get_text_embedding(artwork_embedding_text(artwork))

    def get_image_embedding(self, artwork: Mapping[str, Any]) -> list[float] | None:
        # No image model wired up; callers fall back to text embeddings
        return None
