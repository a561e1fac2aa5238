from fastapi import APIRouter, Depends

from backend.app.api.schemas import (
    CommandRecord,
    SymbolInfo,
    SymbolRequest,
    SymbolResultResponse,
)
from backend.app.dependencies import get_mesh_service
from backend.app.services.mesh_service import MeshService

router = APIRouter()


@router.get("/", response_model=list[SymbolInfo])
def list_symbols(service: MeshService = Depends(get_mesh_service)):
    protocol = service.protocol
    return [
        SymbolInfo(symbol=s, description=protocol.describe(s))
        for s in protocol.symbols()
    ]


@router.post("/execute", response_model=SymbolResultResponse)
def execute_symbol(
    request: SymbolRequest,
    service: MeshService = Depends(get_mesh_service),
):
    return service.protocol.execute(request.symbol, request.payload).to_dict()


@router.get("/history", response_model=list[CommandRecord])
def symbol_history(service: MeshService = Depends(get_mesh_service), limit: int = 25):
    return [c.to_dict() for c in service.protocol.history()[-limit:]]
