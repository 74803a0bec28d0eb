"""
Tests for loading policy documents from files.
"""

import json

import pytest
from policy_search.core.loader import load_policy_file


def test_load_json_list(tmp_path):
    path = tmp_path / "policies.json"
    path.write_text(json.dumps([
        {"id": 7, "text": "Vacation policy", "metadata": {"policyType": "HR"}},
        "Plain string policy",
        {"content": [{"text": "Structured policy"}]},
    ]))

    items = load_policy_file(path)

    assert items == [
        {"text": "Vacation policy", "metadata": {"policyType": "HR"}, "id": "7"},
        {"text": "Plain string policy", "metadata": {}},
        {"text": "Structured policy", "metadata": {}},
    ]


def test_load_json_docs_object(tmp_path):
    path = tmp_path / "policies.json"
    path.write_text(json.dumps({"docs": [{"text": "Laptop policy"}]}))

    assert load_policy_file(path) == [{"text": "Laptop policy", "metadata": {}}]


def test_load_jsonl_skips_blank_lines(tmp_path):
    path = tmp_path / "policies.jsonl"
    path.write_text('{"text": "one"}\n\n{"text": "two", "metadata": {"policyType": "IT"}}\n')

    items = load_policy_file(path)

    assert [item["text"] for item in items] == ["one", "two"]
    assert items[1]["metadata"] == {"policyType": "IT"}


def test_missing_text_is_reported_with_location(tmp_path):
    path = tmp_path / "policies.jsonl"
    path.write_text('{"text": "ok"}\n{"metadata": {}}\n')

    with pytest.raises(ValueError, match="policies.jsonl:2"):
        load_policy_file(path)


def test_wrong_top_level_shape(tmp_path):
    path = tmp_path / "policies.json"
    path.write_text(json.dumps({"policies": []}))

    with pytest.raises(ValueError):
        load_policy_file(path)


def test_loaded_items_index_into_collection(tmp_path, memory_client):
    path = tmp_path / "policies.json"
    path.write_text(json.dumps([{"id": "a", "text": "Travel policy", "metadata": {"policyType": "Finance"}}]))

    assert memory_client.indexer.index_texts(load_policy_file(path)) == ["a"]


def test_null_metadata_values_are_dropped(tmp_path):
    path = tmp_path / "policies.jsonl"
    path.write_text('{"text": "Vacation policy", "metadata": {"policyType": "HR", "owner": null}}\n')

    assert load_policy_file(path)[0]["metadata"] == {"policyType": "HR"}


def test_nested_metadata_is_reported_with_location(tmp_path):
    path = tmp_path / "policies.json"
    path.write_text(json.dumps([{"text": "Vacation policy", "metadata": {"tags": ["leave"]}}]))

    with pytest.raises(ValueError, match=r"policies.json\[0\]: metadata value for 'tags'"):
        load_policy_file(path)


def test_string_content_part_is_reported_with_location(tmp_path):
    path = tmp_path / "policies.jsonl"
    path.write_text('{"content": ["Vacation policy"]}\n')

    with pytest.raises(ValueError, match="policies.jsonl:1: content must be a list of objects"):
        load_policy_file(path)
