from __future__ import annotations
from pydantic import BaseModel, ConfigDict, model_validator
from typing import Dict, Optional

SHORT_ID_LENGTH = 12

class PortBinding(BaseModel):
    model_config = ConfigDict(frozen=True)

    host_port: int
    host_ip: str

class ContainerSnapshot(BaseModel):
    """
    Typed, read-only view of a single container inspect document.

    Built once per inspect call by StructuredFieldExtractor.snapshot().
    """
    model_config = ConfigDict(frozen=True)

    id: str
    image: str
    name: str
    created_at_ms: int
    labels: Dict[str, str] = {}
    ip_address: Optional[str] = None
    # network name -> IP address
    network_ip_addresses: Optional[Dict[str, str]] = None
    # "<port>/<protocol>" -> host binding, None when no host port is published
    port_bindings: Dict[str, Optional[PortBinding]] = {}
    running: bool
    exit_code: Optional[int] = None
    healthy: bool = True
    healthcheck: Optional[str] = None

    @model_validator(mode='after')
    def validate_invariants(self):
        if len(self.id) != SHORT_ID_LENGTH:
            raise ValueError(f'id must be exactly {SHORT_ID_LENGTH} characters')
        if self.running and self.exit_code is not None:
            raise ValueError('exit_code must be unset while the container is running')
        if not self.running and self.exit_code is None:
            raise ValueError('exit_code is required when the container is not running')
        for port in self.port_bindings:
            if '/' not in port:
                raise ValueError(f'port binding key {port!r} has no protocol suffix')
        return self
