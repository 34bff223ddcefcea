from typing import Callable, Dict, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


class ProdSecurityMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, custom_headers: Optional[Dict[str, str]] = None):
        super().__init__(app)

        self.default_headers = {
            "X-Frame-Options": "DENY",
            "X-Content-Type-Options": "nosniff",
            "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
            # The UI is plain same-origin HTML/JS/CSS
            "Content-Security-Policy": "default-src 'self'; script-src 'self'; style-src 'self' 'unsafe-inline'; img-src 'self' data:; connect-src 'self'; frame-ancestors 'none';",
            "Referrer-Policy": "strict-origin-when-cross-origin",
            "Permissions-Policy": "camera=(), microphone=(), geolocation=(), payment=(), usb=()",
            "Cross-Origin-Opener-Policy": "same-origin",
            "Cross-Origin-Resource-Policy": "same-origin",
        }

        if custom_headers:
            self.headers = {**self.default_headers, **custom_headers}
        else:
            self.headers = self.default_headers

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        for header_name, header_value in self.headers.items():
            response.headers[header_name] = header_value

        return response


class DevSecurityMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, custom_headers: Optional[Dict[str, str]] = None):
        super().__init__(app)

        # Allows the UI to be opened from a separate live-reload server
        self.default_headers = {
            "X-Frame-Options": "SAMEORIGIN",
            "X-Content-Type-Options": "nosniff",
            "Referrer-Policy": "strict-origin-when-cross-origin",
        }

        if custom_headers:
            self.headers = {**self.default_headers, **custom_headers}
        else:
            self.headers = self.default_headers

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        for header_name, header_value in self.headers.items():
            response.headers[header_name] = header_value

        return response
