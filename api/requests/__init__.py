from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from config import EVENT_KIND_REPO_UPDATE


class EdgeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from", min_length=1)
    target: str = Field(alias="to", min_length=1)


class GraphRequest(BaseModel):
    nodes: List[str] = Field(default_factory=list)
    edges: List[EdgeModel] = Field(default_factory=list)

    def edge_pairs(self) -> List[Tuple[str, str]]:
        return [(e.source, e.target) for e in self.edges]


class ScanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    repo_path: str = Field(alias="repoPath", min_length=1)


class EmitEventRequest(BaseModel):
    kind: str = EVENT_KIND_REPO_UPDATE
    subject: str
    detail: str


class DeployEventRequest(BaseModel):
    repo: str


class IncidentRequest(BaseModel):
    service: str
    type: str = "incident"
    message: str = ""
    severity: Optional[str] = None
