from fastapi import APIRouter, Depends, Response

from backend.app.api.schemas import (
    CreateFlowRequest,
    FlowResponse,
    RouteResponse,
    StepRequest,
    StepResponse,
    SuggestRequest,
)
from backend.app.dependencies import get_mesh_service
from backend.app.services.mesh_service import MeshService

router = APIRouter()


@router.post("/", response_model=FlowResponse, status_code=201)
def create_flow(
    request: CreateFlowRequest,
    service: MeshService = Depends(get_mesh_service),
):
    return service.orchestrator.create_flow(request.name, request.apis).to_dict()


@router.get("/", response_model=list[FlowResponse])
def list_flows(service: MeshService = Depends(get_mesh_service)):
    return [f.to_dict() for f in service.orchestrator.active_flows()]


@router.post("/suggest", response_model=FlowResponse, status_code=201)
def suggest_flow(
    request: SuggestRequest,
    service: MeshService = Depends(get_mesh_service),
):
    return service.orchestrator.suggest_orchestration(request.requirement).to_dict()


@router.get("/route", response_model=RouteResponse)
def route(
    source: str,
    target: str,
    capability: str,
    service: MeshService = Depends(get_mesh_service),
):
    return RouteResponse(
        route=service.orchestrator.find_optimal_route(source, target, capability),
        graph_route=service.route(source, target),
    )


@router.get("/{flow_id}", response_model=FlowResponse)
def get_flow(flow_id: str, service: MeshService = Depends(get_mesh_service)):
    return service.orchestrator.registry.require(flow_id).to_dict()


@router.delete("/{flow_id}", status_code=204)
def delete_flow(flow_id: str, service: MeshService = Depends(get_mesh_service)):
    service.orchestrator.delete_flow(flow_id)
    return Response(status_code=204)


@router.post("/{flow_id}/steps", response_model=StepResponse, status_code=201)
def add_step(
    flow_id: str,
    request: StepRequest,
    service: MeshService = Depends(get_mesh_service),
):
    step = service.orchestrator.add_step(
        flow_id,
        action=request.action,
        api_id=request.api_id,
        payload=request.payload,
        order=request.order,
    )
    return step.to_dict()


@router.post("/{flow_id}/execute", response_model=FlowResponse)
async def execute_flow(flow_id: str, service: MeshService = Depends(get_mesh_service)):
    flow = await service.orchestrator.execute_flow(flow_id)
    return flow.to_dict()
