"""FastAPI application exposing panelkit over HTTP."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from panelkit import __version__
from panelkit.api.routes import account, actions, auth, config, entities
from panelkit.core.engine import PanelKit
from panelkit.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    ActionNotFoundError,
    ActivationNotFoundError,
    ConfigurationKeyError,
    CredentialsNotFoundError,
    EntityNotFoundError,
    InvalidCredentialsError,
    PanelKitError,
    SelfDeletionError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[PanelKitError], int] = {
    AccountNotFoundError: status.HTTP_404_NOT_FOUND,
    EntityNotFoundError: status.HTTP_404_NOT_FOUND,
    ActionNotFoundError: status.HTTP_404_NOT_FOUND,
    ActivationNotFoundError: status.HTTP_404_NOT_FOUND,
    SelfDeletionError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConfigurationKeyError: status.HTTP_400_BAD_REQUEST,
    CredentialsNotFoundError: status.HTTP_400_BAD_REQUEST,
    AccountAlreadyExistsError: status.HTTP_409_CONFLICT,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
}


def status_code_for(exc: PanelKitError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def panelkit_error_handler(request: Request, exc: PanelKitError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app(panel: PanelKit | None = None) -> FastAPI:
    """Create the API application around ``panel``.

    The panel is bootstrapped by the caller; a panel built from the
    environment is used when none is given.
    """
    app = FastAPI(
        title="panelkit",
        description="Admin panel backend: schema, configuration, accounts and actions",
        version=__version__,
    )
    app.state.panel = panel or PanelKit()

    app.add_exception_handler(PanelKitError, panelkit_error_handler)

    app.include_router(auth.router)
    app.include_router(account.router)
    app.include_router(config.router)
    app.include_router(entities.router)
    app.include_router(actions.router)

    return app
