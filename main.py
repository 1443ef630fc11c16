"""
Main application entry point for the Contatos API.

This module initializes the FastAPI application, configures logging and
CORS, registers the error handlers and includes the contacts router.

Modules:
- FastAPI: Web framework
- CORSMiddleware: Middleware for handling CORS
- app.database: Database engine
- app.models: SQLAlchemy models
- app.contacts: Contacts router
- app.errors: Error handlers
- app.core: Application settings and logging
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.database import engine
from app import models, contacts, schemas
from app.core import configure_logging, get_settings
from app.errors import register_error_handlers

settings = get_settings()
configure_logging(settings.LOG_LEVEL)

# Create tables (no migrations)
models.Base.metadata.create_all(bind=engine)

# Initialize FastAPI application
app = FastAPI(title=settings.APP_TITLE)

register_error_handlers(app)

# Configure CORS middleware (must wrap the error middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers for application areas
app.include_router(contacts.router)


@app.get("/", response_model=schemas.Message)
def root():
    """
    Root endpoint for the API.

    Returns a simple JSON message directing users to the Swagger UI.

    Returns:
        dict: JSON message with information about the API
    """
    return {"msg": "Contatos API. Visit /docs for Swagger UI"}
