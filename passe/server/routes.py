"""
Routes for the sync server.
"""

from typing import Annotated, Any

from fastapi import FastAPI, Header, HTTPException
from pydantic import ValidationError as ModelValidationError

from passe.common.exceptions import PasseError
from passe.common.models import Authentication, ChangeSet, DomainConfig, LoginRequest

from .services import SyncService

HTTP_BAD_REQUEST = 400

BearerHeader = Annotated[str | None, Header()]


def parse_bearer(authorization: str | None) -> Authentication:
    """Parse the JSON ``{user, token}`` carried in the Authorization header."""
    if authorization is None:
        raise HTTPException(HTTP_BAD_REQUEST, "header missing")
    try:
        return Authentication.model_validate_json(authorization)
    except ModelValidationError as e:
        raise HTTPException(HTTP_BAD_REQUEST, "parsing failed") from e


class SyncRoutes:
    """Handles FastAPI routes for the sync server.

    Handlers are plain functions so FastAPI runs them in its threadpool;
    the user database lock is never held across an await.
    """

    def __init__(self, service: SyncService):
        self.service = service

    def setup_routes(self, app: FastAPI) -> None:
        """Setup API routes on the FastAPI app."""

        app.get("/health")(self.health)
        app.post("/register")(self.register)
        app.post("/login")(self.login)
        app.post("/authenticate")(self.authenticate)
        app.get("/db")(self.get_db)
        app.post("/db")(self.post_db)

    def health(self) -> dict[str, Any]:
        """Handle /health endpoint."""
        return self.service.health()

    def register(self, req: LoginRequest) -> Authentication:
        """Handle /register endpoint."""
        try:
            return self.service.register(req)
        except PasseError as e:
            raise HTTPException(e.status_code) from e

    def login(self, req: LoginRequest) -> Authentication:
        """Handle /login endpoint."""
        try:
            return self.service.login(req)
        except PasseError as e:
            raise HTTPException(e.status_code) from e

    def authenticate(self, authorization: BearerHeader = None) -> dict[str, str]:
        """Handle /authenticate endpoint."""
        auth = parse_bearer(authorization)
        try:
            return {"user": self.service.authenticate(auth)}
        except PasseError as e:
            raise HTTPException(e.status_code) from e

    def get_db(self, authorization: BearerHeader = None) -> dict[str, DomainConfig]:
        """Handle GET /db endpoint."""
        auth = parse_bearer(authorization)
        try:
            return self.service.domains(auth)
        except PasseError as e:
            raise HTTPException(e.status_code) from e

    def post_db(
        self, changes: ChangeSet, authorization: BearerHeader = None
    ) -> dict[str, DomainConfig]:
        """Handle POST /db endpoint."""
        auth = parse_bearer(authorization)
        try:
            return self.service.sync(auth, changes.root)
        except PasseError as e:
            raise HTTPException(e.status_code) from e
