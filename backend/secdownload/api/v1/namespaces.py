"""
API Namespaces - Organized endpoint groups
"""

import hmac

from flask import current_app, request
from flask_restx import Namespace, Resource

from secdownload.api.v1.models import error_response, link_request, signed_link_response
from secdownload.config.secdownload_config import SecDownloadConfig
from secdownload.domain.errors import (
    ErrorCategory,
    InvalidFilePathError,
    create_error_response,
)
from secdownload.domain.secure_download.link_signer import SignedLinkService

# =============================================================================
# Links Namespace - Signed link issuance
# =============================================================================

links_ns = Namespace("links", description="Signed download link operations")
for _model in (link_request, signed_link_response, error_response):
    links_ns.add_model(_model.name, _model)


def _check_api_key():
    """
    Return an error response unless the request carries the configured key.

    Link issuance is disabled while no api_key is configured.
    """
    config = current_app.container.resolve(SecDownloadConfig)
    if not config.api_key:
        return create_error_response(
            ErrorCategory.SERVICE_UNAVAILABLE,
            "Link issuance disabled: no api_key configured",
            status_code=503,
        )

    supplied = request.headers.get("X-API-Key", "")
    if not hmac.compare_digest(supplied.encode("utf-8"), config.api_key.encode("utf-8")):
        return create_error_response(
            ErrorCategory.UNAUTHORIZED,
            f"Invalid API key from {request.remote_addr}",
            status_code=403,
        )
    return None


@links_ns.route("/")
class SignedLinks(Resource):
    """Issue signed download links"""

    @links_ns.doc("create_signed_link")
    @links_ns.expect(link_request, validate=True)
    @links_ns.response(201, "Created", signed_link_response)
    @links_ns.response(400, "Bad Request", error_response)
    @links_ns.response(403, "Forbidden", error_response)
    @links_ns.response(503, "Service Unavailable", error_response)
    def post(self):
        """
        Create a signed download link

        The link is valid for the configured timeout before and after the
        signed timestamp. The file is not required to exist yet.
        """
        error = _check_api_key()
        if error is not None:
            return error

        data = request.get_json()
        file_path = data.get("file_path") or ""
        timestamp = data.get("timestamp")

        try:
            link_service = current_app.container.resolve(SignedLinkService)
            link = link_service.generate_signed_link(file_path, timestamp=timestamp)
        except InvalidFilePathError as e:
            return create_error_response(
                ErrorCategory.INVALID_FILE_PATH, str(e), status_code=400
            )
        except Exception as e:
            current_app.logger.exception(f"Unexpected error issuing link: {str(e)}")
            return create_error_response(ErrorCategory.SYSTEM_ERROR, status_code=500)

        current_app.logger.info(f"[LINKS_V1] Issued link for {link.file_path}")
        return link.to_dict(), 201
