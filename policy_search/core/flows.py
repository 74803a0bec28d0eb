"""
Named, schema-validated flows and the policy query flow.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Type

from pydantic import BaseModel

from ..api.schemas import PolicyQuery, PolicyResponse
from ..vector.types import Document, extract_text
from .collection import CollectionClient
from .retrieval import retrieve_similar_policies
from util.logging import logger

POLICY_QUERY_FLOW = "policyQueryFlow"

ANSWER_INTRO = 'Based on your query "{query}", here are the relevant policies:'
ANSWER_OUTRO = "Please review these policies for the specific information you need."


@dataclass
class Flow:
    """A registered flow: a function with declared input and output models."""

    name: str
    input_model: Type[BaseModel]
    output_model: Type[BaseModel]
    fn: Callable[[BaseModel], Any]

    def run(self, payload: Any) -> BaseModel:
        """Validate payload, run the flow and validate its result."""
        data = payload if isinstance(payload, self.input_model) else self.input_model.model_validate(payload)

        start_time = time.time()
        try:
            result = self.fn(data)
        except Exception:
            logger.log_flow_run(self.name, start_time, time.time(), status="failed")
            raise

        if not isinstance(result, self.output_model):
            result = self.output_model.model_validate(result)
        logger.log_flow_run(self.name, start_time, time.time())
        return result

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "input_schema": self.input_model.model_json_schema(),
            "output_schema": self.output_model.model_json_schema(),
        }


class FlowRegistry:
    """
    Registry of named flows.
    Flows are registered once at startup and looked up by name per request.
    """

    def __init__(self):
        self.flows: Dict[str, Flow] = {}

    def define_flow(self, name: str, input_model: Type[BaseModel], output_model: Type[BaseModel]):
        """Decorator registering fn under name with its input and output models."""
        def decorator(fn: Callable[[BaseModel], Any]) -> Flow:
            if name in self.flows:
                raise ValueError(f"Flow '{name}' is already registered")
            flow = Flow(name=name, input_model=input_model, output_model=output_model, fn=fn)
            self.flows[name] = flow
            return flow
        return decorator

    def get(self, name: str) -> Flow:
        if name not in self.flows:
            raise KeyError(f"Unknown flow: {name}")
        return self.flows[name]

    def run(self, name: str, payload: Any) -> BaseModel:
        return self.get(name).run(payload)

    def list_flows(self) -> List[Dict[str, Any]]:
        return [flow.describe() for flow in self.flows.values()]


def unique_policy_types(documents: List[Document]) -> List[str]:
    """Collect policyType metadata, skipping missing values, first occurrence wins."""
    seen = []
    for document in documents:
        policy_type = document.policy_type
        if policy_type is None:
            continue
        policy_type = str(policy_type)
        if policy_type not in seen:
            seen.append(policy_type)
    return seen


def format_answer(query: str, policy_texts: List[str]) -> str:
    """Render the templated answer listing each policy text, numbered from 1."""
    intro = ANSWER_INTRO.format(query=query)
    if not policy_texts:
        # Empty listing collapses to a single blank line between intro and outro
        return f"{intro}\n\n\n{ANSWER_OUTRO}"

    listing = "\n\n".join(f"{i}. {text}" for i, text in enumerate(policy_texts, start=1))
    return f"{intro}\n\n{listing}\n\n{ANSWER_OUTRO}"


def answer_policy_query(client: CollectionClient, request: PolicyQuery) -> PolicyResponse:
    """Retrieve policies for the query and template them into a response."""
    documents = retrieve_similar_policies(client, request.query)

    policy_texts = [extract_text(document) for document in documents]

    return PolicyResponse(
        answer=format_answer(request.query, policy_texts),
        relevant_policies=policy_texts,
        policy_types=unique_policy_types(documents),
    )


def register_policy_flows(registry: FlowRegistry, client: CollectionClient) -> Flow:
    """Register the policy query flow bound to client."""
    @registry.define_flow(POLICY_QUERY_FLOW, PolicyQuery, PolicyResponse)
    def policy_query_flow(request: PolicyQuery) -> PolicyResponse:
        return answer_policy_query(client, request)

    return policy_query_flow
