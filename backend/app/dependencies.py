from functools import lru_cache
import logging
from pathlib import Path
import time

from apimesh.embeddings import EmbeddingProvider, build_provider

from backend.app.config import AppConfig
from backend.app.services.mesh_service import MeshService
from backend.app.loaders.descriptor_loader import load_descriptors


@lru_cache
def get_config() -> AppConfig:
    return AppConfig()


@lru_cache
def get_embedding_provider() -> EmbeddingProvider:
    logger = logging.getLogger("apimesh.startup")
    t0 = time.perf_counter()
    provider = build_provider(get_config().apimesh.embedding)
    logger.info(
        "[startup] embedding provider %s init in %.3fs",
        provider.__class__.__name__,
        time.perf_counter() - t0,
    )
    return provider


@lru_cache
def get_mesh_service() -> MeshService:
    logger = logging.getLogger("apimesh.startup")
    config = get_config()

    t0 = time.perf_counter()
    descriptors = load_descriptors(
        Path(config.descriptors_path),
        config.catalog_keys,
    )
    logger.info(
        "[startup] loaded %d descriptors in %.3fs",
        len(descriptors),
        time.perf_counter() - t0,
    )

    return MeshService(
        descriptors=descriptors,
        provider=get_embedding_provider(),
        config=config.apimesh,
    )
