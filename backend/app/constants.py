DEFAULTS = {
    # Embedding provider: "local" (deterministic) or "huggingface"
    "EMBEDDING_PROVIDER": "local",
    # Vector length for the local provider
    "EMBEDDING_DIMENSION": 384,
    # Per-character scale factor for the local provider
    "EMBEDDING_CHAR_SCALE": 0.001,
    # Sentence encoder used when EMBEDDING_PROVIDER=huggingface
    "EMBEDDING_MODEL": "sentence-transformers/all-MiniLM-L6-v2",
    # Torch device for the HuggingFace provider
    "EMBEDDING_DEVICE": "cpu",
    # Edges are kept only when similarity is strictly above this
    "GRAPH_EDGE_THRESHOLD": 0.3,
    # Edge weight above which a high-similarity recommendation is raised
    "GRAPH_HIGH_SIMILARITY_THRESHOLD": 0.8,
    # Smallest type/capability group emitted as a cluster
    "GRAPH_MIN_CLUSTER_SIZE": 2,
    # Distinct providers needed for a capability-cluster recommendation
    "GRAPH_CAPABILITY_SATURATION_MIN": 3,
    # Default threshold for similar-API lookups
    "SIMILAR_API_THRESHOLD": 0.7,
    # Most recent symbolic commands kept in history
    "PROTOCOL_HISTORY_LIMIT": 1000,
    # Keywords that trigger the query step of a suggested flow
    "ORCHESTRATION_TEXT_KEYWORDS": ["text", "content"],
    # Keywords that trigger the forward step of a suggested flow
    "ORCHESTRATION_STORE_KEYWORDS": ["save", "store"],
    # Processed descriptor table; catalog descriptors are used if absent
    "DESCRIPTORS_PATH": "data/processed/descriptors.json",
    # Catalog entries (env-var keys) used when no descriptor table exists
    "CATALOG_KEYS": [],
}
