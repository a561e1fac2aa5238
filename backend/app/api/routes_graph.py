from fastapi import APIRouter, Depends

from backend.app.api.schemas import GraphResponse, GraphStatsResponse
from backend.app.dependencies import get_mesh_service
from backend.app.services.mesh_service import MeshService

router = APIRouter()


@router.get("/", response_model=GraphResponse)
def graph_document(service: MeshService = Depends(get_mesh_service)):
    return service.graph().to_dict()


@router.post("/refresh", response_model=GraphStatsResponse)
def graph_refresh(service: MeshService = Depends(get_mesh_service)):
    service.refresh()
    return service.graph_stats()


@router.get("/stats", response_model=GraphStatsResponse)
def graph_stats(service: MeshService = Depends(get_mesh_service)):
    return service.graph_stats()
