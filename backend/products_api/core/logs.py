"""
Logging setup and the per-request access log.

The access log writes one Apache "combined" line per request, e.g.::

    127.0.0.1 - - [17/Oct/2026:10:01:02 +0000] "GET /api/products/list HTTP/1.1" 200 57 "-" "curl/8.5.0"
"""

import logging
from datetime import datetime, timezone

from fastapi import Request

access_logger = logging.getLogger("products_api.access")


def configure_logging(level: str = "INFO") -> None:
    # basic console logging, unless the host already configured handlers
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    logging.getLogger("products_api").setLevel(level.upper())


def _request_line(request: Request) -> str:
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    version = request.scope.get("http_version", "1.1")
    return f"{request.method} {target} HTTP/{version}"


def combined_log_line(request: Request, status_code: int, size: str, when: datetime) -> str:
    host = request.client.host if request.client else "-"
    stamp = when.strftime("%d/%b/%Y:%H:%M:%S %z")
    referer = request.headers.get("referer", "-")
    agent = request.headers.get("user-agent", "-")
    return f'{host} - - [{stamp}] "{_request_line(request)}" {status_code} {size} "{referer}" "{agent}"'


async def access_log(request: Request, call_next):
    when = datetime.now(timezone.utc).astimezone()
    response = await call_next(request)
    size = response.headers.get("content-length", "-")
    access_logger.info(combined_log_line(request, response.status_code, size, when))
    return response
