"""
Request and response models for the policy search API and its flows.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict, Any

from ..vector.types import scalar_metadata


class PolicyQuery(BaseModel):
    """Input of the policy query flow."""
    query: str = Field(description="Policy question or topic to search for")


class PolicyResponse(BaseModel):
    """Output of the policy query flow."""
    model_config = ConfigDict(populate_by_name=True)

    answer: str = Field(description="Comprehensive answer based on relevant policies")
    relevant_policies: List[str] = Field(alias="relevantPolicies", description="List of relevant policy excerpts")
    policy_types: List[str] = Field(alias="policyTypes", description="Types of policies referenced")


class FlowRunRequest(BaseModel):
    """Envelope for invoking a flow over HTTP."""
    data: Dict[str, Any]


class FlowRunResponse(BaseModel):
    result: Dict[str, Any]


class FlowInfo(BaseModel):
    name: str
    input_schema: Dict[str, Any]
    output_schema: Dict[str, Any]


class FlowListResponse(BaseModel):
    flows: List[FlowInfo]


class PolicyDocumentIn(BaseModel):
    """A policy document to index."""
    text: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    id: Optional[str] = None

    @field_validator('text')
    @classmethod
    def text_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('text cannot be empty')
        return v

    @field_validator('metadata')
    @classmethod
    def metadata_must_be_scalar(cls, v):
        return scalar_metadata(v)


class PolicyIndexRequest(BaseModel):
    """Request to index documents into the policies collection."""
    docs: List[PolicyDocumentIn]

    @field_validator('docs')
    @classmethod
    def docs_must_not_be_empty(cls, v):
        if not v:
            raise ValueError('docs cannot be empty')
        return v


class PolicyIndexResponse(BaseModel):
    """Response from an indexing operation."""
    indexed_ids: List[str]
    skipped: int
    total_processed: int


class HealthResponse(BaseModel):
    status: str
    version: str
    collection: str
    endpoint: str
    document_count: Optional[int] = None
    error: Optional[str] = None
