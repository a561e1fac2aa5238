from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from apimesh.descriptors.schema import ServiceDescriptor
from apimesh.utils.text import slugify

# Well-known providers, keyed by the environment variable that
# usually carries their credential.
KNOWN_SERVICES: Dict[str, Dict[str, Any]] = {
    "OPENAI_API_KEY": {
        "name": "OpenAI",
        "type": "ai",
        "description": "OpenAI API for language models and embeddings",
        "endpoints": ["https://api.openai.com/v1"],
        "capabilities": ["text-generation", "embeddings", "chat"],
    },
    "HUGGINGFACE_API_KEY": {
        "name": "Hugging Face",
        "type": "ai",
        "description": "Hugging Face API for machine learning models",
        "endpoints": ["https://api-inference.huggingface.co"],
        "capabilities": ["text-generation", "embeddings", "classification"],
    },
    "GITHUB_TOKEN": {
        "name": "GitHub",
        "type": "version-control",
        "description": "GitHub API for repository management",
        "endpoints": ["https://api.github.com"],
        "capabilities": ["repository-management", "user-management", "webhook"],
    },
    "GITLAB_TOKEN": {
        "name": "GitLab",
        "type": "version-control",
        "description": "GitLab API for repository management",
        "endpoints": ["https://gitlab.com/api/v4"],
        "capabilities": ["repository-management", "ci-cd", "user-management"],
    },
    "COHERE_API_KEY": {
        "name": "Cohere",
        "type": "ai",
        "description": "Cohere API for natural language processing",
        "endpoints": ["https://api.cohere.ai/v1"],
        "capabilities": ["text-generation", "embeddings", "classification"],
    },
    "ANTHROPIC_API_KEY": {
        "name": "Anthropic",
        "type": "ai",
        "description": "Anthropic API for Claude AI models",
        "endpoints": ["https://api.anthropic.com/v1"],
        "capabilities": ["text-generation", "chat", "analysis"],
    },
}


def descriptor_from_catalog(key: str, *, source: str = "catalog") -> ServiceDescriptor:
    """
    Build a descriptor for a catalog entry.

    Raises KeyError for keys that are not in the catalog.
    """
    pattern = KNOWN_SERVICES[key]
    return ServiceDescriptor.create(
        id=slugify(pattern["name"]),
        name=pattern["name"],
        type=pattern["type"],
        description=pattern["description"],
        endpoints=pattern["endpoints"],
        capabilities=pattern["capabilities"],
        source=source,
    )


def catalog_descriptors(
    keys: Optional[Iterable[str]] = None,
    *,
    source: str = "catalog",
) -> List[ServiceDescriptor]:
    if keys is None:
        keys = KNOWN_SERVICES.keys()
    return [
        descriptor_from_catalog(k, source=source)
        for k in keys
        if k in KNOWN_SERVICES
    ]


def capabilities_for(name: str) -> List[str]:
    for pattern in KNOWN_SERVICES.values():
        if pattern["name"] == name:
            return list(pattern["capabilities"])
    return []


def is_compatible(a: ServiceDescriptor, b: ServiceDescriptor) -> bool:
    """
    Two descriptors are compatible when they share any capability.
    """
    return any(cap in b.capabilities for cap in a.capabilities)
