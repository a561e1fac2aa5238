from typing import List, Dict, Any, Optional
from pydantic import BaseModel, ConfigDict, Field

from apimesh.orchestration import StepAction


# ---------------- Graph ----------------


class GraphNode(BaseModel):
    id: str
    name: str
    type: str
    capabilities: List[str]
    description: str


class GraphEdge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")
    weight: float
    type: str
    shared_capabilities: List[str]


class Cluster(BaseModel):
    id: str
    name: str
    type: str
    members: List[str]
    description: str


class Recommendation(BaseModel):
    type: str
    priority: str
    title: str
    description: str
    suggested_action: str
    affected_apis: List[str]


class GraphResponse(BaseModel):
    metadata: Dict[str, Any]
    nodes: List[GraphNode]
    edges: List[GraphEdge]
    clusters: List[Cluster]
    recommendations: List[Recommendation]


class GraphStatsResponse(BaseModel):
    nodes: int
    edges: int
    clusters: int
    recommendations: int
    components: int
    metadata: Dict[str, Any]


class SimilarityResponse(BaseModel):
    api1: str
    api2: str
    similarity: float
    shared_capabilities: List[str]


# ---------------- Flows ----------------


class CreateFlowRequest(BaseModel):
    name: str
    apis: List[str] = Field(default_factory=list)


class StepRequest(BaseModel):
    action: StepAction
    api_id: str
    payload: Dict[str, Any] = Field(default_factory=dict)
    order: int = 0


class SuggestRequest(BaseModel):
    requirement: str


class StepResponse(BaseModel):
    id: str
    action: str
    api_id: str
    payload: Dict[str, Any]
    order: int


class FlowResponse(BaseModel):
    id: str
    name: str
    apis: List[str]
    steps: List[StepResponse]
    status: str
    results: Dict[str, Any]
    error: Optional[str] = None


class RouteResponse(BaseModel):
    route: List[str]
    graph_route: List[str]


# ---------------- Symbols ----------------


class SymbolRequest(BaseModel):
    symbol: str
    payload: Dict[str, Any] = Field(default_factory=dict)


class SymbolResultResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None


class SymbolInfo(BaseModel):
    symbol: str
    description: str


class CommandRecord(BaseModel):
    symbol: str
    payload: Dict[str, Any]
    timestamp: str
    result: Optional[SymbolResultResponse] = None
