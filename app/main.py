# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, APIRouter, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi_pagination import add_pagination
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.admin.initialize import initialize_admin_page
from app.api.exception_handlers import register_exception_handlers
from app.api.v1.endpoints import (
    addresses,
    auth,
    cart,
    categories,
    category_attributes,
    favourites,
    orders,
    products,
    users,
)
from app.core.config import settings
from app.core.database import SessionLocal, get_db, engine
from app.core.i18n import I18nMiddleware
from app.core.logging import setup_logging

setup_logging()
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Context manager for application startup and shutdown events.
    """
    log.info("Application starting up...")

    # Health check on startup, the app still starts when the database is down
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        log.info("Database connection successful.")
    except SQLAlchemyError:
        log.exception("Failed to connect to the database on startup")

    log.info("Application has started.")
    yield

    log.info("Application shutting down.")


# Create the main FastAPI application instance
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Storefront backend: category tree, inherited attribute filters, "
    "product catalog, cart and orders.",
    version=settings.VERSION,
    lifespan=lifespan,
)

initialize_admin_page(app, engine)
add_pagination(app)
register_exception_handlers(app)

app.add_middleware(I18nMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create a master API router that will group all other routers
api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(categories.router, tags=["Categories"])
api_router.include_router(category_attributes.router, tags=["Category attributes"])
api_router.include_router(products.router, tags=["Products"])
api_router.include_router(cart.router, tags=["Cart"])
api_router.include_router(orders.router, tags=["Orders"])
api_router.include_router(favourites.router, tags=["Favourites"])
api_router.include_router(addresses.router, tags=["Addresses"])
api_router.include_router(users.router, tags=["Admin"])

app.include_router(api_router)


# Root endpoint for a simple health check
@app.get("/", tags=["Health"])
async def read_root():
    return {"message": f"{settings.PROJECT_NAME} is up and running!"}


@app.get("/db-test", tags=["Health"])
async def db_test(db: Session = Depends(get_db)):
    """
    Tests the database connection by executing a simple query.
    """
    db.execute(text("SELECT 1"))
    return {"message": "Database connection is live."}
