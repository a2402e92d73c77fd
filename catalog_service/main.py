# catalog_service/main.py
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import ServiceSettings, get_settings, setup_logging
from .core import ProductIn, ProductUpdate
from .database import ProductStore, build_store
from .errors import CatalogError, ServiceUnavailable
from .logic import (
    create_product_logic, delete_product_logic, get_product_logic,
    list_products_logic, update_product_logic,
)
from .models import DeleteAck, Product

logger = logging.getLogger(__name__)

router = APIRouter()

def get_store(request: Request) -> ProductStore:
    store = request.app.state.store
    if store is None:
        raise ServiceUnavailable("datastore not initialized")
    return store

# ---------------------------
# Product endpoints
# ---------------------------
@router.get("/api/products", response_model=List[Product])
def list_products(store: ProductStore = Depends(get_store)):
    return list_products_logic(store)

@router.get("/api/products/{product_id}", response_model=Product)
def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return get_product_logic(store, product_id)

@router.post("/api/products", response_model=Product)
def create_product(payload: ProductIn, store: ProductStore = Depends(get_store)):
    return create_product_logic(store, payload)

@router.put("/api/products/{product_id}", response_model=Product)
def update_product(product_id: str, payload: ProductUpdate, store: ProductStore = Depends(get_store)):
    return update_product_logic(store, product_id, payload)

@router.delete("/api/products/{product_id}", response_model=DeleteAck)
def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    return delete_product_logic(store, product_id)

# ---------------------------
# Health
# ---------------------------
@router.get("/")
async def health():
    return {"status": "ok"}

async def catalog_error_handler(request: Request, exc: CatalogError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.store is None:
        settings = app.state.settings or get_settings()
        app.state.store = build_store(settings.database_url)
    try:
        await asyncio.to_thread(app.state.store.initialize)
    except ServiceUnavailable as e:
        # keep serving; requests report 503 until the datastore is back
        logger.error(f"Datastore not ready at startup: {e.detail}")
    yield
    close = getattr(app.state.store, "close", None)
    if close is not None:
        close()

def create_app(store: Optional[ProductStore] = None, settings: Optional[ServiceSettings] = None) -> FastAPI:
    """Build the app. Without an injected store one is built from settings at startup."""
    app = FastAPI(title="Fabe's Farm Store catalog", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.store = store
    app.include_router(router)
    app.add_exception_handler(CatalogError, catalog_error_handler)
    return app

app = create_app()

def run() -> None:
    import uvicorn

    settings = get_settings()
    setup_logging(settings)
    app.state.settings = settings
    logger.info(f"Starting catalog service on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())

if __name__ == "__main__":
    run()
