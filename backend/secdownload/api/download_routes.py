"""
Signed Download Route

Catch-all GET/HEAD route handing the raw request target to
SecureDownloadService. Prefix checks happen in the validator, so every
path not claimed by a more specific route ends up here.
"""

from urllib.parse import quote

from flask import Blueprint, current_app, request

from secdownload.application.secure_download_service import SecureDownloadService

download_bp = Blueprint("secure_download", __name__)


def _raw_request_url() -> str:
    """
    Return the request target as the client sent it (still percent-encoded).

    Falls back to re-quoting the decoded path when the server does not
    expose the raw URI.
    """
    raw = request.environ.get("RAW_URI") or request.environ.get("REQUEST_URI")
    if raw:
        script_root = request.script_root
        if script_root and raw.startswith(script_root):
            raw = raw[len(script_root):]
        return raw

    url = quote(request.path)
    if request.query_string:
        url += "?" + request.query_string.decode("latin-1")
    return url


@download_bp.route(
    "/", defaults={"raw_path": ""}, methods=["GET", "HEAD"], merge_slashes=False
)
@download_bp.route("/<path:raw_path>", methods=["GET", "HEAD"], merge_slashes=False)
def secure_download(raw_path: str):
    """Validate a signed download URL and serve the file or an error page."""
    service = current_app.container.resolve(SecureDownloadService)
    return service.handle(_raw_request_url())
