from __future__ import annotations

from typing import Dict, Iterable, List, Optional
import logging

from apimesh.config.settings import EmbeddingConfig, SIMILAR_API_THRESHOLD
from apimesh.descriptors.schema import ServiceDescriptor
from apimesh.embeddings.encoder import EmbeddingProvider, EmbeddingVector
from apimesh.embeddings.local_encoder import CharFoldEmbeddingProvider
from apimesh.embeddings.similarity import SimilarityComputer, SimilarityRecord
from apimesh.errors import ProviderFailure

logger = logging.getLogger("apimesh.embeddings")


def build_provider(config: EmbeddingConfig) -> EmbeddingProvider:
    """
    Instantiate the provider named by ``config.provider``.

    The HuggingFace backend is imported lazily so that torch and
    transformers are only required when it is selected.
    """
    if config.provider == "huggingface":
        from apimesh.embeddings.hf_encoder import HuggingFaceEmbeddingProvider

        return HuggingFaceEmbeddingProvider(
            model_name=config.model_name,
            device=config.device,
            expected_dimension=config.dimension,
        )

    if config.provider != "local":
        raise ValueError(f"Unknown embedding provider: {config.provider}")

    return CharFoldEmbeddingProvider(
        dimension=config.dimension,
        char_scale=config.char_scale,
    )


class EmbeddingEngine:
    """
    Generates and caches descriptor embeddings.

    Provider failures are isolated per descriptor: the failing
    descriptor is logged and left out, the batch continues.
    """

    def __init__(self, provider: EmbeddingProvider) -> None:
        self.provider = provider
        self._embeddings: Dict[str, EmbeddingVector] = {}

    def generate_embeddings(
        self,
        descriptors: Iterable[ServiceDescriptor],
    ) -> List[EmbeddingVector]:
        vectors: List[EmbeddingVector] = []
        failed = 0

        for descriptor in descriptors:
            try:
                vec = self.provider.embed(descriptor)
            except ProviderFailure as exc:
                failed += 1
                logger.warning(
                    "skipping descriptor %s (%s): %s",
                    descriptor.id,
                    descriptor.name,
                    exc.reason,
                )
                continue

            embedding = EmbeddingVector.create(descriptor, vec)
            vectors.append(embedding)
            self._embeddings[descriptor.id] = embedding

        logger.info(
            "generated %d embeddings (%d skipped)",
            len(vectors),
            failed,
        )
        return vectors

    def get(self, api_id: str) -> Optional[EmbeddingVector]:
        return self._embeddings.get(api_id)

    def all_embeddings(self) -> Dict[str, EmbeddingVector]:
        return dict(self._embeddings)

    def find_similar(
        self,
        target_id: str,
        threshold: float = SIMILAR_API_THRESHOLD,
    ) -> List[SimilarityRecord]:
        """
        Cached embeddings scoring at least ``threshold`` against the
        target, most similar first.
        """
        target = self._embeddings.get(target_id)
        if target is None:
            return []

        records: List[SimilarityRecord] = []
        for api_id, other in self._embeddings.items():
            if api_id == target_id:
                continue
            record = SimilarityComputer.compare(target, other)
            if record.score >= threshold:
                records.append(record)

        return sorted(records, key=lambda r: r.score, reverse=True)
