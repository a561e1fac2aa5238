import asyncio
import json
import logging
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for _path in (ROOT, ROOT / "src"):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from backend.app.config import AppConfig  # noqa: E402
from backend.app.dependencies import get_embedding_provider  # noqa: E402
from backend.app.loaders.descriptor_loader import load_descriptors  # noqa: E402
from backend.app.services.mesh_service import MeshService  # noqa: E402


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logger = logging.getLogger("apimesh.run")
    start = time.perf_counter()
    config = AppConfig()

    service = MeshService(
        descriptors=load_descriptors(Path(config.descriptors_path), config.catalog_keys),
        provider=get_embedding_provider(),
        config=config.apimesh,
    )

    graph = service.refresh()
    logger.info("graph ready in %.2fs", time.perf_counter() - start)
    logger.info(json.dumps(graph.to_dict(), indent=2))

    for rec in graph.recommendations:
        logger.info("[%s] %s: %s", rec.priority.value, rec.title, rec.description)

    requirement = " ".join(sys.argv[1:]) or "generate text content and store it"
    flow = service.orchestrator.suggest_orchestration(requirement)
    logger.info("suggested flow %s with %d steps", flow.id, len(flow.steps))

    asyncio.run(service.orchestrator.execute_flow(flow.id))
    logger.info(json.dumps(flow.to_dict(), indent=2, default=str))


if __name__ == "__main__":
    main()
