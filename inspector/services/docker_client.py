"""
Docker SDK access for fetching live inspect documents.

Only inspect.py talks to the runtime; the extractor itself never does.
"""
import docker
from docker.errors import APIError
from ..core.config import cfg

def get_client():
    """Client for DOCKER_HOST (or the local socket), bounded by DOCKER_TIMEOUT_S."""
    return docker.from_env(timeout=cfg.DOCKER_TIMEOUT_S)

def safe(container_call, *args, **kwargs):
    """Run a docker SDK call, turning daemon errors into RuntimeError."""
    try:
        return container_call(*args, **kwargs)
    except APIError as e:
        raise RuntimeError(str(e)) from e
