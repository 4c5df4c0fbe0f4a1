"""Tests for manifest library."""

from typing import Any

import pytest

from playground.exceptions import InputException
from playground.manifest import (
    ConfigMap,
    TRACKER_LABELS,
    TRACKER_NAME,
    TRACKER_NAMESPACE,
    new_tracker_config_map,
)

DOC: dict[str, Any] = {
    "apiVersion": "v1",
    "kind": "ConfigMap",
    "metadata": {
        "name": TRACKER_NAME,
        "namespace": TRACKER_NAMESPACE,
        "resourceVersion": "1234",
        "uid": "5d0c2e3f",
        "labels": TRACKER_LABELS,
    },
    "data": {
        "cert-manager": "helm",
    },
}


def test_parse_doc() -> None:
    """Test parsing a ConfigMap object."""
    config_map = ConfigMap.parse_doc(DOC)
    assert config_map.name == TRACKER_NAME
    assert config_map.namespace == TRACKER_NAMESPACE
    assert config_map.namespaced_name == f"{TRACKER_NAMESPACE}/{TRACKER_NAME}"
    assert config_map.labels == TRACKER_LABELS
    assert config_map.data == {"cert-manager": "helm"}
    assert config_map.resource_version == "1234"


def test_parse_doc_without_data() -> None:
    """Test a ConfigMap without data has an empty mapping."""
    config_map = ConfigMap.parse_doc(
        {
            "apiVersion": "v1",
            "kind": "ConfigMap",
            "metadata": {"name": "example", "namespace": "default"},
            "data": None,
        }
    )
    assert config_map.data == {}
    assert config_map.labels == {}
    assert config_map.resource_version is None


@pytest.mark.parametrize(
    ("doc", "match"),
    [
        ({"kind": "Secret", "metadata": {}}, "expected 'ConfigMap'"),
        ({"kind": "ConfigMap"}, "missing metadata"),
        ({"kind": "ConfigMap", "metadata": {"namespace": "a"}}, "metadata.name"),
        ({"kind": "ConfigMap", "metadata": {"name": "a"}}, "metadata.namespace"),
    ],
)
def test_parse_invalid_doc(doc: dict[str, Any], match: str) -> None:
    """Test parsing objects that are not valid ConfigMaps."""
    with pytest.raises(InputException, match=match):
        ConfigMap.parse_doc(doc)


def test_to_doc() -> None:
    """Test rendering a ConfigMap carries the resource version."""
    doc = ConfigMap.parse_doc(DOC).to_doc()
    assert doc == {
        "apiVersion": "v1",
        "kind": "ConfigMap",
        "metadata": {
            "name": TRACKER_NAME,
            "namespace": TRACKER_NAMESPACE,
            "labels": TRACKER_LABELS,
            "resourceVersion": "1234",
        },
        "data": {"cert-manager": "helm"},
    }


def test_new_tracker_config_map() -> None:
    """Test the unsaved tracker ConfigMap has no resource version."""
    doc = new_tracker_config_map().to_doc()
    assert "resourceVersion" not in doc["metadata"]
    assert doc["metadata"]["labels"] == TRACKER_LABELS
    assert doc["data"] == {}


def test_serialize() -> None:
    """Test the dict serialization uses the kubernetes field name."""
    config_map = ConfigMap.parse_doc(DOC)
    data = config_map.to_dict()
    assert data["resourceVersion"] == "1234"
    assert ConfigMap.from_dict(data) == config_map
    assert "resourceVersion" not in new_tracker_config_map().to_dict()
