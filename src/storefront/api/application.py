"""FastAPI application factory.

The domain must be initialized before ``create_app`` is called. Every
request is wrapped in the storefront domain context.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api import cart_router, order_router, product_router, user_router
from storefront.api.errors import register_error_handlers
from storefront.domain import storefront
from storefront.seed import seed_catalogue


@asynccontextmanager
async def lifespan(app: FastAPI):
    with storefront.domain_context():
        seed_catalogue()
    yield


def create_app(seed: bool = True) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="Catalogue, carts and the order lifecycle with stock reservation",
        lifespan=lifespan if seed else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context for each request."""
        with storefront.domain_context():
            response = await call_next(request)
        return response

    register_error_handlers(app)

    app.include_router(product_router)
    app.include_router(user_router)
    app.include_router(order_router)
    app.include_router(cart_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app
