"""
API v1 - SecDownload management API

Versioned endpoints with OpenAPI/Swagger documentation.
"""

from flask import Blueprint
from flask_restx import Api

from .namespaces import links_ns


def create_api_blueprint(api_version: str = "v1") -> Blueprint:
    """
    Create the API blueprint with its Flask-RESTX Api.

    A new blueprint is built per application so the factory can be called
    more than once in a process.

    Args:
        api_version: Version segment of the URL prefix
    """
    blueprint = Blueprint(f"api_{api_version}", __name__, url_prefix=f"/api/{api_version}")

    api = Api(
        blueprint,
        version="1.0",
        title="SecDownload API",
        description="Issue time-limited signed download links",
        doc="/docs",  # Swagger UI will be available at /api/v1/docs
        license="MIT",
    )
    api.add_namespace(links_ns, path="/links")

    return blueprint
