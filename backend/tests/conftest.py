from __future__ import annotations

import numpy as np
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from contextlib import asynccontextmanager

from backend.app.main import create_app
from backend.app.config import AppConfig
from backend.app.dependencies import get_mesh_service
from backend.app.services.mesh_service import MeshService

from apimesh.config.settings import ApimeshConfig
from apimesh.descriptors import ServiceDescriptor, catalog_descriptors
from apimesh.embeddings import CharFoldEmbeddingProvider, EmbeddingVector


def make_vector(
    api_id: str,
    values,
    *,
    type: str = "ai",
    capabilities=("chat",),
) -> EmbeddingVector:
    return EmbeddingVector(
        api_id=api_id,
        vector=np.asarray(values, dtype=float),
        name=api_id.upper(),
        type=type,
        capabilities=tuple(capabilities),
        description=f"{api_id} service",
    )


@pytest.fixture()
def descriptors() -> list[ServiceDescriptor]:
    return catalog_descriptors()


@pytest.fixture()
def provider() -> CharFoldEmbeddingProvider:
    return CharFoldEmbeddingProvider()


@pytest.fixture()
def service(descriptors, provider) -> MeshService:
    return MeshService(
        descriptors=descriptors,
        provider=provider,
        config=ApimeshConfig(),
    )


@pytest.fixture()
def client(service: MeshService):
    @asynccontextmanager
    async def _no_lifespan(_: FastAPI):
        yield

    app = create_app(AppConfig())
    app.router.lifespan_context = _no_lifespan

    app.dependency_overrides[get_mesh_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
