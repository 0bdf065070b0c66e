import logging
from docker.errors import APIError, NotFound
from .docker_client import get_client, safe
from .extractor import StructuredFieldExtractor
from ..models.schemas import ContainerSnapshot

logger = logging.getLogger(__name__)

class ContainerNotFound(Exception):
    pass

def inspect_container(container_id: str) -> ContainerSnapshot:
    """Fetch a container's inspect document from the runtime and project it."""
    cli = get_client()
    try:
        c = cli.containers.get(container_id)
    except NotFound as e:
        raise ContainerNotFound(str(e))
    except APIError as e:
        raise RuntimeError(str(e)) from e
    safe(c.reload)
    logger.debug(f"Inspected container {container_id}")
    return StructuredFieldExtractor(c.attrs or {}).snapshot()
