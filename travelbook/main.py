from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from travelbook.config import AppConfig, load_app_config
from travelbook.identity import TokenAcquisition, build_msal_app, build_token_cache
from travelbook.keyvault import load_client_secret
from travelbook.logging_config import configure_app_logging
from travelbook.routers import authentication, users
from travelbook.services.users import UserLookupError
from travelbook.settings import Settings, get_settings

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = ".TravelBook.Auth"
SESSION_MAX_AGE_SECONDS = 8 * 60 * 60
PLACEHOLDER_SESSION_SECRETS = frozenset({"change-me", "changeme", "secret"})


def _require_session_secret(settings: Settings) -> str:
    secret = (settings.session_secret or "").strip()
    if not secret or secret.lower() in PLACEHOLDER_SESSION_SECRETS:
        raise RuntimeError("APP_SESSION_SECRET must be set to a private random value")
    return secret


async def _user_lookup_error_handler(request: Request, exc: UserLookupError) -> JSONResponse:
    logger.warning("User lookup failed path=%s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


def create_app(config: AppConfig | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    session_secret = _require_session_secret(settings)
    # Loaded eagerly: the OIDC callback paths are part of the route table.
    config = config or load_app_config(settings.resolved_config_path())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_app_logging(settings.log_level)
        logger.info("App startup beginning")

        resolved = load_client_secret(config, settings.secrets_dir)
        app.state.app_config = resolved
        app.state.token_acquisition = TokenAcquisition(build_msal_app(resolved.azure_ad, build_token_cache()))
        logger.info("MSAL client ready authority=%s", resolved.azure_ad.authority)

        yield

    app = FastAPI(title="TravelBook", lifespan=lifespan)
    app.state.app_config = config

    # Sliding 8h session cookie, re-issued on every response.
    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret,
        session_cookie=SESSION_COOKIE_NAME,
        max_age=SESSION_MAX_AGE_SECONDS,
        same_site="none" if settings.session_https_only else "lax",
        https_only=settings.session_https_only,
    )
    # Outermost: scheme and client address are fixed before anything builds URLs.
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=settings.forwarded_allow_ips)
    app.add_exception_handler(UserLookupError, _user_lookup_error_handler)

    app.include_router(authentication.router)
    app.include_router(authentication.build_callback_router(config.azure_ad))
    app.include_router(users.router)

    return app
