"""
Outcome Responses

Flask response builders for each validation outcome.
"""

import mimetypes
import posixpath
from http import HTTPStatus
from typing import Callable

from flask import Response, send_file

from secdownload.application.outcome_dispatcher import OutcomeDispatcher
from secdownload.config.secdownload_config import SecDownloadConfig
from secdownload.domain.errors import ERROR_MESSAGES, ErrorCategory
from secdownload.domain.secure_download.value_objects import OutcomeKind, ValidationOutcome

# Rejection outcome -> (error category, HTTP status)
REJECTIONS = {
    OutcomeKind.BAD_REQUEST: (ErrorCategory.BAD_REQUEST, 400),
    OutcomeKind.SECURITY: (ErrorCategory.SECURITY, 403),
    OutcomeKind.EXPIRED: (ErrorCategory.URL_GONE, 410),
    OutcomeKind.NOT_FOUND: (ErrorCategory.FILE_NOT_FOUND, 404),
}

NO_CACHE_HEADERS = {
    "Expires": "Thu, 19 Nov 1981 08:52:00 GMT",
    "Cache-Control": "no-store, no-cache, must-revalidate, post-check=0, pre-check=0",
    "Pragma": "no-cache",
}

ERROR_PAGE_TEMPLATE = (
    '<!DOCTYPE html><html lang="en">'
    "<head><title>{status} {phrase}</title></head>"
    "<body>"
    "<h1>{title}</h1>"
    "<p>{message}</p>"
    "</body></html>"
)


def send_download(outcome: ValidationOutcome) -> Response:
    """
    Stream a served file as an attachment with caching disabled.

    Args:
        outcome: SERVE outcome
    """
    mimetype, _ = mimetypes.guess_type(outcome.resolved_path)
    response = send_file(
        outcome.resolved_path,
        mimetype=mimetype or "application/octet-stream",
        as_attachment=True,
        download_name=posixpath.basename(outcome.file_path),
        conditional=False,
        etag=False,
    )
    for name, value in NO_CACHE_HEADERS.items():
        response.headers[name] = value
    return response


def render_error_page(category: ErrorCategory, status: int, server: str) -> Response:
    """
    Build an HTML error response.

    The body is static per category; request details are never included.
    """
    info = ERROR_MESSAGES[category]
    body = ERROR_PAGE_TEMPLATE.format(
        status=status,
        phrase=HTTPStatus(status).phrase,
        title=info["title"],
        message=info["message"],
    )
    return Response(
        body,
        status=status,
        headers={"Content-Type": "text/html", "Server": server},
    )


def _rejection_handler(
    kind: OutcomeKind, config_provider: Callable[[], SecDownloadConfig]
) -> Callable[[ValidationOutcome], Response]:
    category, status = REJECTIONS[kind]

    def handler(outcome: ValidationOutcome) -> Response:
        return render_error_page(category, status, config_provider().server)

    return handler


def build_outcome_dispatcher(
    config_provider: Callable[[], SecDownloadConfig],
) -> OutcomeDispatcher[Response]:
    """
    Create a dispatcher with an HTTP handler for every outcome kind.

    Args:
        config_provider: Returns the active configuration (for the Server header)
    """
    dispatcher: OutcomeDispatcher[Response] = OutcomeDispatcher()
    dispatcher.register(OutcomeKind.SERVE, send_download)
    for kind in REJECTIONS:
        dispatcher.register(kind, _rejection_handler(kind, config_provider))
    return dispatcher
