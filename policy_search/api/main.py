"""
HTTP surface for the policy search service: registered flows, indexing and health.
"""

from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
import logging
import threading

from .schemas import (
    FlowInfo,
    FlowListResponse,
    FlowRunRequest,
    FlowRunResponse,
    HealthResponse,
    PolicyIndexRequest,
    PolicyIndexResponse,
)
from ..core.collection import CollectionClient, build_collection_client
from ..core.config import VERSION, debug_enabled, load_collection_config
from ..core.flows import FlowRegistry, register_policy_flows


def create_app(client: CollectionClient = None) -> FastAPI:
    """
    Build the API application.

    Args:
        client: Collection client to serve; when omitted it is built from the
            environment on first use, once, under a lock. A build failure is
            reported by /health as unhealthy.
    """
    app = FastAPI(
        title="Policy Search API",
        version=VERSION,
        description="Similarity search over the policies vector collection",
        docs_url="/docs" if debug_enabled() else None,
        redoc_url="/redoc" if debug_enabled() else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.client = client
    app.state.registry = None
    build_lock = threading.Lock()

    def get_client() -> CollectionClient:
        if app.state.client is None:
            with build_lock:
                if app.state.client is None:
                    app.state.client = build_collection_client()
        return app.state.client

    def get_registry(client: CollectionClient = Depends(get_client)) -> FlowRegistry:
        if app.state.registry is None:
            with build_lock:
                if app.state.registry is None:
                    registry = FlowRegistry()
                    register_policy_flows(registry, client)
                    app.state.registry = registry
        return app.state.registry

    @app.get("/health", response_model=HealthResponse)
    def health_check_endpoint():
        """Check that the vector store answers for the collection."""
        try:
            client = get_client()
            count = client.count()
        except Exception as e:
            logging.warning(f"Vector store health check failed: {e}")
            config = app.state.client.config if app.state.client is not None else load_collection_config()
            return HealthResponse(
                status="unhealthy",
                version=VERSION,
                collection=config.collection_name,
                endpoint=config.endpoint,
                error=str(e) if debug_enabled() else None
            )

        return HealthResponse(
            status="healthy",
            version=VERSION,
            collection=client.collection_name,
            endpoint=client.config.endpoint,
            document_count=count
        )

    @app.get("/flows", response_model=FlowListResponse)
    def list_flows_endpoint(registry: FlowRegistry = Depends(get_registry)):
        """List registered flows with their input and output schemas."""
        return FlowListResponse(flows=[FlowInfo(**flow) for flow in registry.list_flows()])

    @app.post("/flows/{name}", response_model=FlowRunResponse)
    def run_flow_endpoint(name: str, request: FlowRunRequest, registry: FlowRegistry = Depends(get_registry)):
        """Run a registered flow on request.data and return its validated result."""
        try:
            flow = registry.get(name)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Flow not found: {name}")

        try:
            payload = flow.input_model.model_validate(request.data)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

        result = flow.run(payload)
        return FlowRunResponse(result=result.model_dump(by_alias=True))

    @app.post("/policies/index", response_model=PolicyIndexResponse)
    def index_policies_endpoint(request: PolicyIndexRequest, client: CollectionClient = Depends(get_client)):
        """Index policy documents into the collection."""
        indexed_ids = client.indexer.index_texts([doc.model_dump() for doc in request.docs])

        return PolicyIndexResponse(
            indexed_ids=indexed_ids,
            skipped=len(request.docs) - len(indexed_ids),
            total_processed=len(request.docs)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions."""
        logging.error(f"Unhandled exception: {exc}")
        content = {"detail": "Internal server error"}
        if debug_enabled():
            content["debug"] = str(exc)
        return JSONResponse(
            status_code=500,
            content=content,
        )

    return app


app = create_app()
