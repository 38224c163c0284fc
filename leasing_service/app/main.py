from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import leasing_engine, Base
from shared.core.logging_config import setup_logging
from shared.exception_handler import setup_exception_handlers

from . import models  # registers every mapped class on Base
from .router.leasing import rental_contracts_router
from .router.space_sites import commercial_spaces_router
from .router.parking_access import parking_router

setup_logging()

app = FastAPI(title="Leasing Service API")

# Create all tables
Base.metadata.create_all(bind=leasing_engine)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Include routers
app.include_router(rental_contracts_router.router)
app.include_router(commercial_spaces_router.router)
app.include_router(parking_router.router)
