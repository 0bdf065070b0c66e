import logging, sys
from ..core.config import cfg

def setup(level=None):
    logging.basicConfig(
        level=level or getattr(logging, cfg.LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Suppress verbose docker SDK / connection pool logs
    logging.getLogger("docker").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
