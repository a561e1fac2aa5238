"""
Service descriptors.

A descriptor is the structured profile of one discovered API:
identity, category, endpoints and declared capabilities.
"""

from apimesh.descriptors.schema import ServiceDescriptor
from apimesh.descriptors.catalog import (
    KNOWN_SERVICES,
    descriptor_from_catalog,
    catalog_descriptors,
    capabilities_for,
    is_compatible,
)

__all__ = [
    "ServiceDescriptor",
    "KNOWN_SERVICES",
    "descriptor_from_catalog",
    "catalog_descriptors",
    "capabilities_for",
    "is_compatible",
]
