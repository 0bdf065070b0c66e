"""
Projection of container inspect documents into ContainerSnapshot fields.

Every method reads one field from the wrapped document. Required fields raise
MalformedDocument; optional ones fall back to None or an empty mapping when
the key is missing or null.
"""
import json
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from ..models.schemas import ContainerSnapshot, PortBinding, SHORT_ID_LENGTH
from .lookup import MalformedDocument, lookup

logger = logging.getLogger(__name__)

CONFIG = "Config"
CREATED = "Created"
HOST_IP = "HostIp"
HOST_PORT = "HostPort"
ID = "Id"
IMAGE = "Image"
LABELS = "Labels"
NAME = "Name"
IP = "IPAddress"
NETWORK_SETTINGS = "NetworkSettings"
NETWORKS = "Networks"
PORTS = "Ports"
STATE = "State"
RUNNING = "Running"
EXIT_CODE = "ExitCode"
HEALTH = "Health"
STATUS = "Status"
HEALTHCHECK = "Healthcheck"
TEST = "Test"

HEALTH_STATUS_HEALTHY = "healthy"
DEFAULT_PROTOCOL = "tcp"
HEALTHCHECK_SEPARATOR = ", "

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Runtimes emit RFC 3339 with up to nanosecond precision, e.g.
# 2024-05-01T12:30:45.123456789Z
_TIMESTAMP_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>Z|z|[+-]\d{2}:?\d{2})?$"
)


def parse_timestamp_ms(value: str) -> int:
    """Convert an ISO-8601 timestamp to epoch milliseconds (UTC if no offset)."""
    match = _TIMESTAMP_RE.match(value.strip())
    if not match:
        raise ValueError(f"not an ISO-8601 timestamp: {value!r}")

    dt = datetime.strptime(match.group("base"), "%Y-%m-%dT%H:%M:%S")
    frac = match.group("frac") or ""
    dt = dt.replace(microsecond=int((frac + "000000")[:6]), tzinfo=timezone.utc)

    tz = match.group("tz")
    if tz and tz not in ("Z", "z"):
        sign = -1 if tz[0] == "-" else 1
        digits = tz[1:].replace(":", "")
        offset = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
        dt = dt - sign * offset

    return (dt - _EPOCH) // timedelta(milliseconds=1)


def normalize_port_key(port: str) -> str:
    """'80' -> '80/tcp'; keys that already carry a protocol are unchanged."""
    if "/" not in port:
        return f"{port}/{DEFAULT_PROTOCOL}"
    return port


def json_text(value) -> str:
    """Strings as-is, anything else as its JSON text (true, null, {"k": 1})."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


class StructuredFieldExtractor:
    """Read-only accessor over one parsed container inspect document."""

    def __init__(self, document: dict):
        if not isinstance(document, dict):
            raise MalformedDocument("", f"inspect document must be an object, got {type(document).__name__}")
        self._doc = document

    @property
    def document(self) -> dict:
        return self._doc

    def created(self) -> int:
        raw = lookup(self._doc, CREATED, expect=str).required()
        try:
            return parse_timestamp_ms(raw)
        except (ValueError, OverflowError) as e:
            raise MalformedDocument(CREATED, str(e)) from e

    def id(self) -> str:
        # the short form is enough to identify a container
        full_id = lookup(self._doc, ID, expect=str).required()
        if len(full_id) < SHORT_ID_LENGTH:
            raise MalformedDocument(ID, f"expected at least {SHORT_ID_LENGTH} characters, got {len(full_id)}")
        return full_id[:SHORT_ID_LENGTH]

    def image(self) -> str:
        return lookup(self._doc, CONFIG, IMAGE, expect=str).required()

    def labels(self) -> Dict[str, str]:
        lookup(self._doc, CONFIG, expect=dict).required()
        labels = lookup(self._doc, CONFIG, LABELS, expect=dict).optional({})
        return {key: json_text(value) for key, value in labels.items()}

    def name(self) -> str:
        name = lookup(self._doc, NAME, expect=str).required()
        if name.startswith("/"):
            name = name[1:]
        return name

    def ip_address(self) -> Optional[str]:
        return lookup(self._doc, NETWORK_SETTINGS, IP, expect=str).optional()

    def network_ip_addresses(self) -> Optional[Dict[str, str]]:
        networks = lookup(self._doc, NETWORK_SETTINGS, NETWORKS, expect=dict).optional()
        if not networks:
            return None

        results = {}
        for network_name in networks:
            ip = lookup(networks, network_name, IP, expect=str)
            if ip.present:
                results[network_name] = ip.value
            else:
                # missing entries are skipped, wrong types are not
                ip.optional()
                logger.debug(f"Network '{network_name}' has no IP address, skipping")
        return results

    def port_bindings(self) -> Dict[str, Optional[PortBinding]]:
        ports = lookup(self._doc, NETWORK_SETTINGS, PORTS, expect=dict).optional({})

        bindings: Dict[str, Optional[PortBinding]] = {}
        for port, host_configs in ports.items():
            bindings[normalize_port_key(port)] = self._first_binding(port, host_configs)
        return bindings

    def _first_binding(self, port: str, host_configs) -> Optional[PortBinding]:
        path = f"{NETWORK_SETTINGS}.{PORTS}.{port}"
        if host_configs is None:
            return None
        if not isinstance(host_configs, list):
            raise MalformedDocument(path, f"expected list, got {type(host_configs).__name__}")
        if not host_configs:
            return None

        # only the first host binding is used
        host_config = host_configs[0]
        if not isinstance(host_config, dict):
            raise MalformedDocument(f"{path}[0]", f"expected object, got {type(host_config).__name__}")
        host_ip = lookup(host_config, HOST_IP, expect=str)
        host_port = lookup(host_config, HOST_PORT, expect=(str, int))
        try:
            port_number = int(host_port.required())
        except ValueError as e:
            raise MalformedDocument(f"{path}[0].{HOST_PORT}", f"not a port number: {host_port.value!r}") from e
        return PortBinding(host_port=port_number, host_ip=host_ip.required())

    def running(self) -> bool:
        lookup(self._doc, STATE, expect=dict).required()
        return lookup(self._doc, STATE, RUNNING, expect=bool).required()

    def exit_code(self) -> Optional[int]:
        if self.running():
            return None
        return lookup(self._doc, STATE, EXIT_CODE, expect=int).required()

    def healthy(self) -> bool:
        lookup(self._doc, STATE, expect=dict).required()
        health = lookup(self._doc, STATE, HEALTH, expect=dict)
        if health.absent:
            # runtimes without health check support count as healthy
            return True
        health.required()
        status = lookup(self._doc, STATE, HEALTH, STATUS, expect=str).required()
        return status == HEALTH_STATUS_HEALTHY

    def healthcheck(self) -> Optional[str]:
        lookup(self._doc, CONFIG, expect=dict).required()
        test = lookup(self._doc, CONFIG, HEALTHCHECK, TEST, expect=list).optional()
        if test is None:
            return None
        return HEALTHCHECK_SEPARATOR.join(json_text(part) for part in test)

    def snapshot(self) -> ContainerSnapshot:
        """Extract every field; any MalformedDocument aborts the whole snapshot."""
        running = self.running()
        return ContainerSnapshot(
            id=self.id(),
            image=self.image(),
            name=self.name(),
            created_at_ms=self.created(),
            labels=self.labels(),
            ip_address=self.ip_address(),
            network_ip_addresses=self.network_ip_addresses(),
            port_bindings=self.port_bindings(),
            running=running,
            exit_code=self.exit_code(),
            healthy=self.healthy(),
            healthcheck=self.healthcheck(),
        )
