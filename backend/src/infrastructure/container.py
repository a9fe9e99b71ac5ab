"""
Dependency Injection Container
Manages the document store and the services built on it
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine
from loguru import logger

from application.repositories.interfaces import IDocumentStore
from application.services.jobs import JobService
from application.services.matching import BoundingBoxSearch, MatchService
from application.services.profile import ProfileService
from core.config import settings
from core.database import create_engine, create_session_factory, init_db, close_db
from core.logging_config import configure_logging
from infrastructure.persistence.memory_store import InMemoryDocumentStore
from infrastructure.persistence.repositories.document_store import SQLAlchemyDocumentStore


# Singleton instances
_engine: Optional[AsyncEngine] = None
_document_store: Optional[IDocumentStore] = None


def get_document_store() -> IDocumentStore:
    """Get document store instance (singleton), backend chosen by settings"""
    global _engine, _document_store
    if _document_store is None:
        if settings.DOCUMENT_STORE == "sql":
            _engine = create_engine()
            _document_store = SQLAlchemyDocumentStore(create_session_factory(_engine))
        else:
            _document_store = InMemoryDocumentStore()
        logger.info(f"Document store: {type(_document_store).__name__}")
    return _document_store


def get_bounding_box_search(store: Optional[IDocumentStore] = None) -> BoundingBoxSearch:
    return BoundingBoxSearch(
        store or get_document_store(),
        max_latitude=settings.MAX_QUERY_LATITUDE,
    )


def get_match_service(store: Optional[IDocumentStore] = None) -> MatchService:
    store = store or get_document_store()
    return MatchService(
        store,
        search=get_bounding_box_search(store),
        salary_tolerance=settings.SALARY_TOLERANCE,
        default_limit=settings.DEFAULT_QUERY_LIMIT,
    )


def get_job_service(store: Optional[IDocumentStore] = None) -> JobService:
    store = store or get_document_store()
    return JobService(
        store,
        search=get_bounding_box_search(store),
        expiry_days=settings.JOB_EXPIRY_DAYS,
        default_currency=settings.DEFAULT_CURRENCY,
        default_limit=settings.DEFAULT_QUERY_LIMIT,
    )


def get_profile_service(store: Optional[IDocumentStore] = None) -> ProfileService:
    store = store or get_document_store()
    return ProfileService(
        store,
        search=get_bounding_box_search(store),
        default_radius_km=settings.DEFAULT_SEARCH_RADIUS_KM,
        default_currency=settings.DEFAULT_CURRENCY,
        default_limit=settings.DEFAULT_QUERY_LIMIT,
    )


async def startup() -> IDocumentStore:
    """Configure logging, build the store and create tables when SQL-backed"""
    configure_logging()
    store = get_document_store()
    if _engine is not None:
        await init_db(_engine)
    logger.info(f"{settings.APP_NAME} ready ({settings.ENVIRONMENT})")
    return store


async def shutdown():
    """Dispose of the engine and forget singletons"""
    global _engine, _document_store
    if _engine is not None:
        await close_db(_engine)
    _engine = None
    _document_store = None
