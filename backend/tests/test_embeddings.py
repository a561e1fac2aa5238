import numpy as np
import pytest

from apimesh.config.settings import EmbeddingConfig
from apimesh.descriptors import ServiceDescriptor
from apimesh.embeddings import (
    CharFoldEmbeddingProvider,
    EmbeddingEngine,
    EmbeddingProvider,
    EmbeddingVector,
    build_provider,
)
from apimesh.errors import ProviderFailure


class FlakyProvider(CharFoldEmbeddingProvider):
    """Fails for descriptors whose name starts with 'Broken'."""

    def _encode_text(self, text: str) -> np.ndarray:
        if text.startswith("Broken"):
            raise RuntimeError("backend unavailable")
        return super()._encode_text(text)


class ShortProvider(EmbeddingProvider):
    def _encode_text(self, text: str) -> np.ndarray:
        return np.ones(self.dimension - 1)


def _descriptor(id_: str, name: str, **kwargs) -> ServiceDescriptor:
    return ServiceDescriptor.create(
        id=id_,
        name=name,
        type=kwargs.pop("type", "ai"),
        description=kwargs.pop("description", f"{name} API"),
        capabilities=kwargs.pop("capabilities", ["text-generation"]),
        **kwargs,
    )


def test_local_provider_is_deterministic(descriptors):
    first = CharFoldEmbeddingProvider()
    second = CharFoldEmbeddingProvider()

    for d in descriptors:
        assert np.array_equal(first.embed(d), second.embed(d))


def test_local_vectors_have_unit_norm_and_fixed_dimension(descriptors, provider):
    for d in descriptors:
        vec = provider.embed(d)
        assert vec.shape == (384,)
        assert abs(np.linalg.norm(vec) - 1.0) < 1e-4


def test_char_fold_wraps_positions_modulo_dimension():
    provider = CharFoldEmbeddingProvider(dimension=4, char_scale=1.0)
    vec = provider._encode_text("abcde")

    raw = np.array([ord("a") + ord("e"), ord("b"), ord("c"), ord("d")], dtype=float)
    assert np.allclose(vec, raw / np.linalg.norm(raw))


def test_signature_joins_name_type_description_and_capabilities():
    d = _descriptor("x", "X", description="does things", capabilities=["a", "b"])
    assert EmbeddingProvider.signature(d) == "X ai does things a b"


def test_embedded_vectors_are_read_only(provider, descriptors):
    vec = provider.embed(descriptors[0])
    with pytest.raises(ValueError):
        vec[0] = 42.0


def test_provider_wraps_encoder_errors():
    provider = FlakyProvider(dimension=8)
    with pytest.raises(ProviderFailure) as info:
        provider.embed(_descriptor("b1", "Broken"))
    assert info.value.descriptor_id == "b1"
    assert isinstance(info.value.__cause__, RuntimeError)


def test_provider_rejects_wrong_dimension():
    with pytest.raises(ProviderFailure):
        ShortProvider(dimension=4).embed(_descriptor("s", "Short"))


def test_generate_embeddings_skips_failing_descriptors():
    engine = EmbeddingEngine(FlakyProvider(dimension=32))
    batch = [
        _descriptor("ok-1", "Alpha"),
        _descriptor("bad", "Broken"),
        _descriptor("ok-2", "Beta"),
    ]

    vectors = engine.generate_embeddings(batch)

    assert [v.api_id for v in vectors] == ["ok-1", "ok-2"]
    assert engine.get("bad") is None
    assert list(engine.all_embeddings()) == ["ok-1", "ok-2"]


def test_vectors_carry_descriptor_metadata(descriptors, provider):
    engine = EmbeddingEngine(provider)
    vectors = engine.generate_embeddings(descriptors[:1])

    v = vectors[0]
    d = descriptors[0]
    assert v.api_id == d.id
    assert v.name == d.name
    assert v.type == d.type
    assert v.capabilities == d.capabilities
    assert v.description == d.description
    assert v.to_dict()["metadata"]["name"] == d.name


def test_find_similar_sorts_descending_and_excludes_target(descriptors, provider):
    engine = EmbeddingEngine(provider)
    engine.generate_embeddings(descriptors)

    records = engine.find_similar("openai", threshold=-1.0)

    assert len(records) == len(descriptors) - 1
    assert all(r.api_a == "openai" for r in records)
    assert "openai" not in {r.api_b for r in records}
    scores = [r.score for r in records]
    assert scores == sorted(scores, reverse=True)


def test_find_similar_unknown_target_is_empty(provider):
    assert EmbeddingEngine(provider).find_similar("missing") == []


def test_build_provider_selects_local():
    provider = build_provider(EmbeddingConfig(dimension=16))
    assert isinstance(provider, CharFoldEmbeddingProvider)
    assert provider.dimension == 16


def test_build_provider_rejects_unknown_backend():
    with pytest.raises(ValueError):
        build_provider(EmbeddingConfig(provider="bogus"))


def test_embedding_vectors_compare_by_identity_and_are_hashable(provider):
    d = _descriptor("openai", "OpenAI")
    first = EmbeddingVector.create(d, provider.embed(d))
    second = EmbeddingVector.create(d, provider.embed(d))

    assert first == first
    assert first != second
    assert len({first, second}) == 2
