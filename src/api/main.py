"""
FastAPI backend: REST API for contacts.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from contactbook.config import Settings, load_env

load_env()

from fastapi import FastAPI, HTTPException, Request  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from pydantic import BaseModel  # noqa: E402

from contactbook.application import (  # noqa: E402
    ContactService,
    Duplicate,
    Invalid,
    StorageError,
)
from contactbook.infrastructure import open_backend  # noqa: E402

_settings = Settings.from_env()

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=_settings.log_level,
)
logger = logging.getLogger(__name__)


def get_service(request: Request) -> ContactService:
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Storage not initialized")
    return service


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.backend = None
    app.state.service = None
    settings = Settings.from_env()
    try:
        app.state.backend = open_backend(settings)
        app.state.service = ContactService(app.state.backend.repository)
        logger.info("Contact storage ready (backend: %s)", app.state.backend.name)
        yield
    finally:
        if app.state.backend is not None:
            logger.info("Closing contact storage (backend: %s)", app.state.backend.name)
            app.state.backend.close()
            app.state.backend = None
            app.state.service = None


app = FastAPI(title="Contactbook API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_settings.cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: contacts ---


class CreateContactBody(BaseModel):
    # Missing or null fields fail validation (400), not parsing (422).
    name: str | None = None
    email: str | None = None


@app.get("/contacts")
def list_contacts(request: Request):
    service = get_service(request)
    return [s.as_dict() for s in service.get_all()]


@app.get("/contacts/search")
def search_contacts(request: Request, q: str = ""):
    service = get_service(request)
    return [s.as_dict() for s in service.search(q)]


@app.get("/contacts/count")
def count_contacts(request: Request):
    service = get_service(request)
    return {"count": service.count()}


@app.get("/contacts/{contact_id}")
def get_contact(contact_id: str, request: Request):
    service = get_service(request)
    contact = service.get_by_id(contact_id)
    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact.as_dict()


@app.post("/contacts")
def create_contact(request: Request, body: CreateContactBody | None = None):
    service = get_service(request)
    if body is None:
        body = CreateContactBody()
    result = service.create(body.name, body.email)
    if isinstance(result, Invalid):
        raise HTTPException(status_code=400, detail=result.errors)
    if isinstance(result, Duplicate):
        raise HTTPException(
            status_code=409, detail="A contact with this email already exists"
        )
    return JSONResponse(content=result.contact.as_dict(), status_code=201)


@app.delete("/contacts/{contact_id}")
def delete_contact(contact_id: str, request: Request):
    service = get_service(request)
    if not service.delete(contact_id):
        raise HTTPException(status_code=404, detail="Contact not found")
    return {"status": "deleted", "id": contact_id}
