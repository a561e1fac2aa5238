from typing import Optional

from fastapi import APIRouter, Depends, Query

from backend.app.api.schemas import SimilarityResponse
from backend.app.dependencies import get_mesh_service
from backend.app.services.mesh_service import MeshService

router = APIRouter()


@router.get("/{api_id}/similar", response_model=list[SimilarityResponse])
def similar_apis(
    api_id: str,
    threshold: Optional[float] = Query(default=None, ge=-1.0, le=1.0),
    service: MeshService = Depends(get_mesh_service),
):
    return [r.to_dict() for r in service.similar(api_id, threshold)]
