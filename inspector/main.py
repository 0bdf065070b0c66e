from fastapi import FastAPI, HTTPException, Request
import logging

from .utils.logging import setup
from .core.config import cfg
from .models.schemas import ContainerSnapshot
from .services.documents import load_document
from .services.extractor import StructuredFieldExtractor
from .services.inspect import inspect_container, ContainerNotFound
from .services.lookup import MalformedDocument

logger = logging.getLogger(__name__)

setup()

app = FastAPI(title="Container Inspector")

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/containers/{container_id}", response_model=ContainerSnapshot)
def get_container(container_id: str):
    try:
        return inspect_container(container_id)
    except ContainerNotFound:
        raise HTTPException(status_code=404, detail="container not found")
    except MalformedDocument as e:
        # The runtime answered, but not with a usable inspect document
        raise HTTPException(status_code=502, detail={"path": e.path, "reason": e.reason})

@app.post("/snapshots", response_model=ContainerSnapshot)
async def create_snapshot(request: Request):
    """Project a raw inspect document (Engine API object or docker CLI list)."""
    # raw bytes: the body may be a CLI list, UTF-16, or not JSON at all
    body = await request.body()
    try:
        return StructuredFieldExtractor(load_document(body)).snapshot()
    except MalformedDocument as e:
        raise HTTPException(status_code=422, detail={"path": e.path, "reason": e.reason})

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=cfg.APP_PORT)
