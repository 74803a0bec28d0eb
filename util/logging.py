"""
Structured operation logging for the policy search service.
Retrieval, indexing and flow runs are logged as single-line operation records.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

class StructuredLogger:
    """Structured logger for retrieval, indexing and flow operations."""

    def __init__(self, name: str = "policy_search"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.info(message)

    def log_retrieval(self, query: str, hits: List[Tuple[str, Dict[str, Any]]], preview_chars: int = 150):
        """Log a human-readable summary of retrieved documents given as (text, metadata) pairs."""
        self.logger.info(f'Found {len(hits)} similar policies for query: "{query}"')
        for index, (text, metadata) in enumerate(hits, start=1):
            self.logger.info(f"{index}. {text[:preview_chars]}...")
            if metadata:
                self.logger.info(f"   Metadata: {json.dumps(metadata, default=str)}")

    def log_index(self, collection: str, indexed: int, skipped: int = 0, status: str = "success"):
        """Log a batch indexing operation."""
        details = {"collection": collection, "indexed": indexed}
        if skipped:
            details["skipped"] = skipped

        self.log_operation("collection.index", status, details)

    def log_vector_operation(self, operation: str, collection: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log a vector store operation."""
        log_details = {"collection": collection}
        if details:
            log_details.update(details)

        self.log_operation(f"vector.{operation}", status, log_details)

    def log_flow_run(self, flow_name: str, start_time: float, end_time: float, status: str = "success", details: Optional[Dict[str, Any]] = None):
        """Log flow execution with its duration."""
        duration_ms = round((end_time - start_time) * 1000, 2)
        log_details = {"duration_ms": duration_ms}
        if details:
            log_details.update(details)
        elif status == "failed":
            log_details["message"] = f"Flow '{flow_name}' failed after {duration_ms}ms"

        self.log_operation(f"flow.{flow_name}", status, log_details)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)


# Global logger instance
logger = StructuredLogger()
