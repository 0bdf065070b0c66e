"""
Test ContainerSnapshot invariants.
"""
import pytest
from pydantic import ValidationError
from inspector.models.schemas import ContainerSnapshot, PortBinding


def snapshot_kwargs(**overrides):
    kwargs = dict(
        id="abcdef123456",
        image="nginx:1.25",
        name="web",
        created_at_ms=0,
        running=True,
    )
    kwargs.update(overrides)
    return kwargs


class TestContainerSnapshot:
    """Model-level invariants."""

    def test_defaults(self):
        snapshot = ContainerSnapshot(**snapshot_kwargs())
        assert snapshot.labels == {}
        assert snapshot.port_bindings == {}
        assert snapshot.network_ip_addresses is None
        assert snapshot.healthy is True

    def test_id_length(self):
        with pytest.raises(ValidationError):
            ContainerSnapshot(**snapshot_kwargs(id="abc"))

    def test_exit_code_only_when_stopped(self):
        with pytest.raises(ValidationError):
            ContainerSnapshot(**snapshot_kwargs(running=True, exit_code=0))
        with pytest.raises(ValidationError):
            ContainerSnapshot(**snapshot_kwargs(running=False))
        assert ContainerSnapshot(**snapshot_kwargs(running=False, exit_code=1)).exit_code == 1

    def test_port_keys_need_protocol(self):
        with pytest.raises(ValidationError):
            ContainerSnapshot(**snapshot_kwargs(port_bindings={"80": None}))

    def test_snapshot_is_frozen(self):
        snapshot = ContainerSnapshot(**snapshot_kwargs())
        with pytest.raises(ValidationError):
            snapshot.name = "other"

    def test_port_binding_serialization(self):
        snapshot = ContainerSnapshot(**snapshot_kwargs(port_bindings={
            "80/tcp": PortBinding(host_port=8080, host_ip="0.0.0.0"),
            "443/tcp": None,
        }))
        assert snapshot.model_dump()["port_bindings"] == {
            "80/tcp": {"host_port": 8080, "host_ip": "0.0.0.0"},
            "443/tcp": None,
        }
