"""Tests for the in-memory object client."""

import pytest

from playground.client import InMemoryClient
from playground.exceptions import ErrorKind, ObjectClientError
from playground.manifest import ConfigMap


@pytest.fixture
def client() -> InMemoryClient:
    return InMemoryClient()


def config_map(**kwargs: str) -> ConfigMap:
    return ConfigMap(name="example", namespace="default", data=dict(kwargs))


async def test_get_missing(client: InMemoryClient) -> None:
    """Test fetching an object that does not exist."""
    assert await client.get("default", "example") is None


async def test_create_and_get(client: InMemoryClient) -> None:
    """Test a created object is versioned and can be fetched."""
    created = await client.create(config_map(a="helm"))
    assert created.resource_version == "1"
    result = await client.get("default", "example")
    assert result == created


async def test_create_exists(client: InMemoryClient) -> None:
    """Test creating an object twice."""
    await client.create(config_map())
    with pytest.raises(ObjectClientError) as exc:
        await client.create(config_map())
    assert exc.value.kind == ErrorKind.ALREADY_EXISTS


async def test_returned_objects_are_copies(client: InMemoryClient) -> None:
    """Test changing a returned object does not change the stored object."""
    created = await client.create(config_map())
    created.data["a"] = "helm"
    result = await client.get("default", "example")
    assert result is not None
    assert result.data == {}


async def test_update(client: InMemoryClient) -> None:
    """Test a conditional update with the current version."""
    created = await client.create(config_map())
    created.data["a"] = "helm"
    updated = await client.update(created)
    assert updated.resource_version == "2"
    assert updated.data == {"a": "helm"}


async def test_update_conflict(client: InMemoryClient) -> None:
    """Test an update with a stale version is rejected."""
    created = await client.create(config_map())
    first = await client.get("default", "example")
    assert first is not None
    await client.update(created)

    first.data["a"] = "helm"
    with pytest.raises(ObjectClientError) as exc:
        await client.update(first)
    assert exc.value.kind == ErrorKind.CONFLICT


async def test_update_unconditional(client: InMemoryClient) -> None:
    """Test an update without a version replaces the object."""
    await client.create(config_map())
    updated = await client.update(config_map(a="argocd"))
    assert updated.data == {"a": "argocd"}


async def test_update_missing(client: InMemoryClient) -> None:
    """Test updating an object that does not exist."""
    with pytest.raises(ObjectClientError) as exc:
        await client.update(config_map())
    assert exc.value.kind == ErrorKind.NOT_FOUND


async def test_requests(client: InMemoryClient) -> None:
    """Test every request is recorded."""
    await client.get("default", "example")
    await client.create(config_map())
    assert client.requests == [("get", "example"), ("create", "example")]
