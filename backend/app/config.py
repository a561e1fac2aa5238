from dataclasses import dataclass
from dynaconf import Dynaconf
from backend.app.constants import DEFAULTS

from apimesh.config.settings import (
    EmbeddingConfig,
    GraphConfig,
    OrchestrationConfig,
    ApimeshConfig,
)

settings = Dynaconf(
    envvar_prefix="APIMESH",
    load_dotenv=True,
    settings_files=[],
)


def _get(key: str):
    return settings.get(key, DEFAULTS.get(key))


def _parse_csv(value):
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return tuple(value)
    if isinstance(value, str):
        return tuple(v.strip() for v in value.split(",") if v.strip())
    return None


@dataclass(frozen=True)
class AppConfig:
    # ---------------- App ----------------
    app_name: str = settings.get("APP_NAME", "apimesh-backend")
    api_prefix: str = settings.get("API_PREFIX", "")

    # ---------------- Descriptor source ----------------
    descriptors_path: str = _get("DESCRIPTORS_PATH")
    catalog_keys: tuple = _parse_csv(_get("CATALOG_KEYS")) or ()

    # ---------------- apimesh Policy ----------------
    apimesh: ApimeshConfig = ApimeshConfig(
        embedding=EmbeddingConfig(
            provider=_get("EMBEDDING_PROVIDER"),
            dimension=int(_get("EMBEDDING_DIMENSION")),
            char_scale=float(_get("EMBEDDING_CHAR_SCALE")),
            model_name=_get("EMBEDDING_MODEL"),
            device=_get("EMBEDDING_DEVICE"),
        ),
        graph=GraphConfig(
            edge_threshold=float(_get("GRAPH_EDGE_THRESHOLD")),
            high_similarity_threshold=float(_get("GRAPH_HIGH_SIMILARITY_THRESHOLD")),
            min_cluster_size=int(_get("GRAPH_MIN_CLUSTER_SIZE")),
            capability_saturation_min=int(_get("GRAPH_CAPABILITY_SATURATION_MIN")),
        ),
        orchestration=OrchestrationConfig(
            text_keywords=_parse_csv(_get("ORCHESTRATION_TEXT_KEYWORDS")),
            store_keywords=_parse_csv(_get("ORCHESTRATION_STORE_KEYWORDS")),
        ),
        similar_threshold=float(_get("SIMILAR_API_THRESHOLD")),
        protocol_history_limit=int(_get("PROTOCOL_HISTORY_LIMIT")),
    )
