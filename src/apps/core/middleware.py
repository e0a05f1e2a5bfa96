"""Custom middleware for the application."""

import logging
import re
import time
import uuid

from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

SKIP_PATHS = ("/static/", "/favicon.ico", "/health/live/", "/livez/")

REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


class RequestLoggingMiddleware(MiddlewareMixin):
    """Log one line per request with status, duration and a request id.

    The request id is echoed back in the ``X-Request-ID`` response header.
    A client-supplied ``X-Request-ID`` is reused only when it matches
    ``REQUEST_ID_PATTERN``; otherwise a new id is generated.
    """

    def process_request(self, request):
        request.start_time = time.monotonic()
        request.request_id = self._get_request_id(request)
        return None

    def process_response(self, request, response):
        if not hasattr(request, "start_time"):
            return response

        response["X-Request-ID"] = request.request_id

        if request.path.startswith(SKIP_PATHS):
            return response

        duration_ms = round((time.monotonic() - request.start_time) * 1000, 2)
        log_data = {
            "request_id": request.request_id,
            "method": request.method,
            "path": request.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
            "ip_address": self._get_client_ip(request),
        }

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(
            level,
            "%s %s %s (%sms)",
            request.method,
            request.path,
            response.status_code,
            duration_ms,
            extra=log_data,
        )
        return response

    def _get_request_id(self, request):
        supplied = request.headers.get("X-Request-ID", "")
        if REQUEST_ID_PATTERN.fullmatch(supplied):
            return supplied
        return uuid.uuid4().hex[:8]

    def _get_client_ip(self, request):
        x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
        if x_forwarded_for:
            return x_forwarded_for.split(",")[0].strip()
        return request.META.get("REMOTE_ADDR", "unknown")


class SecurityHeadersMiddleware(MiddlewareMixin):
    """Add basic security headers to all responses."""

    def process_response(self, request, response):
        response["X-Frame-Options"] = "DENY"
        response["X-Content-Type-Options"] = "nosniff"
        response["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
