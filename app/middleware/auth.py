from typing import Callable, List, Optional

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.config import settings

logger = structlog.get_logger()


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware to enforce authentication for all routes except those explicitly excluded.

    Only checks that a Bearer token is present; the token itself is verified
    by the ``CurrentUser`` dependency.
    """

    def __init__(
        self,
        app: ASGIApp,
        public_paths: Optional[List[str]] = None,
        public_path_prefixes: Optional[List[str]] = None,
    ):
        """
        Initialize the auth middleware.

        Args:
            app: The ASGI app
            public_paths: List of exact paths that are publicly accessible
            public_path_prefixes: List of path prefixes that are publicly accessible
        """
        super().__init__(app)
        self.public_paths = public_paths or [
            "/docs",
            "/redoc",
            "/openapi.json",
            f"{settings.API_V1_STR}/openapi.json",
            f"{settings.API_V1_STR}/health",
        ]

        self.public_path_prefixes = public_path_prefixes or [
            "/docs/",
            "/redoc/",
        ]

    def is_public(self, path: str) -> bool:
        if path in self.public_paths:
            return True
        return any(path.startswith(prefix) for prefix in self.public_path_prefixes)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Reject non-public requests that carry no Bearer token.

        Args:
            request: The incoming request
            call_next: The next middleware or endpoint handler

        Returns:
            The response
        """
        # Skip authentication for OPTIONS requests (CORS preflight)
        if request.method == "OPTIONS" or self.is_public(request.url.path):
            return await call_next(request)

        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            logger.info(
                "Rejected unauthenticated request",
                path=request.url.path,
                method=request.method,
            )
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={
                    "error": {
                        "code": "AUTHENTICATION_ERROR",
                        "message": "Authentication required",
                    }
                },
            )

        return await call_next(request)


def setup_auth_middleware(app: FastAPI):
    """
    Set up the authentication middleware for the application.

    Args:
        app: The FastAPI application
    """
    app.add_middleware(AuthMiddleware)
