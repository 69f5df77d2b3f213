"""
Helpdesk Assistant - Main Application
=====================================

IT-support request desk with a keyword-driven assistant.

Modules:
- Requests: request taxonomy and read-only request listing
- Assistant: intent classification, knowledge base answers, request digests

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities and value objects
- Infrastructure: Database, Supabase REST
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from zoneinfo import ZoneInfo

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Configuration and Core
from helpdesk.config import settings
from helpdesk.core import ApplicationException

# Infrastructure
from helpdesk.infrastructure.database import init_database, close_database, create_tables
from helpdesk.infrastructure.supabase import SupabaseRestClient

# Requests module
from helpdesk.requests.infrastructure import (
    SQLAlchemyRequestRepository,
    SupabaseRequestRepository,
)
from helpdesk.requests.interfaces import requests_router

# Assistant module
from helpdesk.assistant.application import AssistantService
from helpdesk.assistant.domain import ResponseFormatter, load_knowledge_base
from helpdesk.assistant.infrastructure import (
    SQLAlchemyConversationRepository,
    SupabaseConversationRepository,
)
from helpdesk.assistant.interfaces import assistant_router

# Logging and middleware
from helpdesk.shared.infrastructure.logging import setup_logging, get_logger
from helpdesk.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    application_exception_handler,
    global_exception_handler,
)

logger = get_logger(__name__)


def build_formatter() -> ResponseFormatter:
    timezone = ZoneInfo(settings.display_timezone) if settings.display_timezone else None
    return ResponseFormatter(display_timezone=timezone)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Connect the configured store backend (database or Supabase)
    3. Load the knowledge base
    4. Build the assistant service

    SHUTDOWN:
    1. Close the Supabase HTTP client
    2. Close database connections
    """
    # === STARTUP ===
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting Helpdesk Assistant", extra={
        "version": settings.app_version,
        "environment": settings.environment,
        "request_store_backend": settings.request_store_backend
    })

    supabase_client: Optional[SupabaseRestClient] = None

    if settings.request_store_backend == "supabase":
        logger.info("Connecting Supabase request store")
        supabase_client = SupabaseRestClient()
        app.state.request_repository = SupabaseRequestRepository(supabase_client)
        app.state.conversation_repository = SupabaseConversationRepository(supabase_client)
    else:
        logger.info("Initializing database")
        init_database()
        # Note: If the database is not reachable the service still starts;
        # status queries then answer with the "try again later" message
        try:
            await create_tables()
        except Exception as e:
            logger.warning(f"Database not available - running in degraded mode: {e}")
        app.state.request_repository = SQLAlchemyRequestRepository()
        app.state.conversation_repository = SQLAlchemyConversationRepository()

    logger.info("Loading knowledge base")
    knowledge_base = load_knowledge_base(settings.knowledge_base_path)
    app.state.knowledge_base = knowledge_base

    app.state.assistant_service = AssistantService(
        app.state.request_repository,
        knowledge_base=knowledge_base,
        formatter=build_formatter()
    )

    logger.info("Helpdesk Assistant started", extra={"categories": knowledge_base.categories})

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down Helpdesk Assistant")

    if supabase_client is not None:
        await supabase_client.close()

    await close_database()

    logger.info("Helpdesk Assistant shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Helpdesk Assistant API",
    description="""
    ## IT-Support Requests and Assistant

    ### 🤖 Assistant

    - `POST /assistant/chat` - Ask the assistant (status of your requests,
      how to open a request, common IT problems)
    - `POST /assistant/conversations` - Start a conversation
    - `GET /assistant/conversations/{id}/messages` - Conversation history

    ### 📋 Requests

    - `GET /requests` - A user's requests (all / active / resolved, with search)

    Status and priority values are accepted in both spellings
    (`resolved`/`resolvida`, `high`/`alta`, ...) and always shown with one label.
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(LoggingMiddleware)
app.add_middleware(CorrelationIDMiddleware)
app.add_exception_handler(ApplicationException, application_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# === Include Module Routers ===
app.include_router(assistant_router)
app.include_router(requests_router)


# === Health Check Endpoint ===

@app.get("/health", tags=["Health"], responses={
    200: {
        "description": "Service is healthy",
        "content": {
            "application/json": {
                "example": {
                    "status": "healthy",
                    "version": "1.0.0",
                    "environment": "development",
                    "checks": {
                        "request_store": "database",
                        "conversation_store": "configured",
                        "knowledge_base": "6 categories"
                    }
                }
            }
        }
    }
})
async def health_check(request: Request):
    """
    Health check endpoint for load balancers and orchestrators.

    Reports which collaborators were wired at startup.
    """
    state = request.app.state
    knowledge_base = getattr(state, "knowledge_base", None)

    checks = {
        "request_store": (
            settings.request_store_backend
            if getattr(state, "request_repository", None) is not None
            else "not_configured"
        ),
        "conversation_store": (
            "configured"
            if getattr(state, "conversation_repository", None) is not None
            else "not_configured"
        ),
        "knowledge_base": (
            f"{len(knowledge_base)} categories" if knowledge_base is not None else "not_loaded"
        ),
    }

    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": checks
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "service": "Helpdesk Assistant",
        "version": settings.app_version,
        "architecture": "Clean Architecture / Modular Monolith",
        "docs": "/docs",
        "health": "/health",
        "modules": {
            "assistant": {
                "prefix": "/assistant",
                "endpoints": [
                    "POST /assistant/chat - Send a message",
                    "POST /assistant/conversations - Start a conversation",
                    "GET /assistant/conversations/{id}/messages - Conversation history"
                ]
            },
            "requests": {
                "prefix": "/requests",
                "endpoints": [
                    "GET /requests - List a user's requests"
                ]
            }
        }
    }


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "helpdesk.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
