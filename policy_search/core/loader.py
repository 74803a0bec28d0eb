"""
Reading policy documents from JSON and JSON Lines files for indexing.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from ..vector.types import scalar_metadata


def _normalize(item: Any, origin: str) -> Dict[str, Any]:
    if isinstance(item, str):
        return {"text": item, "metadata": {}}
    if not isinstance(item, dict):
        raise ValueError(f"{origin}: expected an object or string, got {type(item).__name__}")

    text = item.get("text")
    content = item.get("content")
    if text is None and content:
        # Structured shape: [{text: ...}, ...]
        if not isinstance(content, list) or not isinstance(content[0], dict):
            raise ValueError(f"{origin}: content must be a list of objects")
        text = content[0].get("text")
    if not isinstance(text, str):
        raise ValueError(f"{origin}: missing 'text'")

    metadata = item.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise ValueError(f"{origin}: metadata must be an object")
    try:
        metadata = scalar_metadata(metadata)
    except ValueError as e:
        raise ValueError(f"{origin}: {e}")

    normalized = {"text": text, "metadata": metadata}
    if item.get("id") is not None:
        normalized["id"] = str(item["id"])
    return normalized


def load_policy_file(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Load policy documents from a file.

    Supported layouts:
        *.jsonl: one document per line
        *.json: a list of documents, or an object with a "docs" list

    Each document is a string or an object with text (or content[0].text),
    optional metadata and optional id.

    Returns:
        List of {text, metadata, id?} dicts
    """
    path = Path(path)
    raw = path.read_text(encoding="utf-8")

    if path.suffix == ".jsonl":
        items = []
        for line_number, line in enumerate(raw.splitlines(), start=1):
            if not line.strip():
                continue
            items.append(_normalize(json.loads(line), f"{path.name}:{line_number}"))
        return items

    data = json.loads(raw)
    if isinstance(data, dict):
        data = data.get("docs")
    if not isinstance(data, list):
        raise ValueError(f"{path.name}: expected a list of documents or an object with 'docs'")
    return [_normalize(item, f"{path.name}[{i}]") for i, item in enumerate(data)]
