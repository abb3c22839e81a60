"""
Application Factory

Creates and configures the Flask application with all dependencies.
The factory accepts configuration overrides so tests can inject a
download root, secret and clock.
"""

import logging
import os
import time
from pathlib import Path
from typing import Callable, Optional

from flask import Flask, jsonify
from flask_cors import CORS

from secdownload.api.download_routes import download_bp
from secdownload.api.responses import build_outcome_dispatcher
from secdownload.api.v1 import create_api_blueprint
from secdownload.application.configuration_holder import ConfigurationHolder
from secdownload.application.dependency_container import DependencyContainer
from secdownload.application.secure_download_service import SecureDownloadService
from secdownload.config.secdownload_config import SecDownloadConfig
from secdownload.domain.secure_download.link_signer import SignedLinkService
from secdownload.infrastructure.local_file_storage_repository import LocalFileStorageRepository
from secdownload.infrastructure.logging_handler import LoggingOutcomeHandler

logger = logging.getLogger(__name__)


class AppConfig:
    """Application configuration."""

    def __init__(self):
        self.api_version = os.getenv("API_VERSION", "v1")
        self.flask_env = os.getenv("FLASK_ENV", "development")
        self.is_production = self.flask_env == "production"
        self.cors_origins = os.getenv("CORS_ORIGINS", "*")


def create_app(
    config: Optional[AppConfig] = None,
    download_config: Optional[SecDownloadConfig] = None,
    clock: Callable[[], float] = time.time,
) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Application configuration, uses default if None
        download_config: Download configuration, loaded from the environment if None
        clock: Returns the current Unix time (used for link expiry)

    Returns:
        Configured Flask application
    """
    if config is None:
        config = AppConfig()
    if download_config is None:
        download_config = SecDownloadConfig.from_env()

    # Every path is a potential download URL; no static route
    app = Flask(__name__, static_folder=None)

    CORS(
        app,
        resources={
            r"/api/*": {
                "origins": config.cors_origins,
                "methods": ["GET", "POST", "OPTIONS"],
                "allow_headers": ["Content-Type", "X-API-Key"],
                "max_age": 3600,
            }
        },
    )

    _initialize_services(app, download_config, clock)
    _register_blueprints(app, config)
    _register_health_endpoint(app)

    return app


def _initialize_services(
    app: Flask, download_config: SecDownloadConfig, clock: Callable[[], float]
) -> None:
    """
    Initialize application services and attach them to the app via DependencyContainer.

    Args:
        app: Flask application
        download_config: Initial download configuration
        clock: Time source shared by validation and link issuance
    """
    container = DependencyContainer()

    config_holder = ConfigurationHolder(download_config)
    container.register_singleton(ConfigurationHolder, config_holder)
    # Always the snapshot active at resolution time
    container.register_transient(SecDownloadConfig, lambda: config_holder.current)

    outcome_logger = LoggingOutcomeHandler(logging.getLogger("secdownload.downloads"))
    download_service = SecureDownloadService(
        config_holder,
        build_outcome_dispatcher(lambda: config_holder.current),
        storage_factory=LocalFileStorageRepository,
        observers=[outcome_logger],
        clock=clock,
    )
    container.register_singleton(SecureDownloadService, download_service)

    link_service = SignedLinkService(lambda: config_holder.current, clock=clock)
    container.register_singleton(SignedLinkService, link_service)

    app.container = container
    app.config_holder = config_holder

    logger.info(
        f"Download service initialized: {download_config.to_public_dict()}"
    )


def _register_blueprints(app: Flask, config: AppConfig) -> None:
    """
    Register API and download blueprints.

    Args:
        app: Flask application
        config: Application configuration
    """
    app.register_blueprint(create_api_blueprint(config.api_version))
    app.register_blueprint(download_bp)

    logger.info(
        f"API {config.api_version} registered at /api/{config.api_version} "
        f"with Swagger UI at /api/{config.api_version}/docs"
    )


def _get_health_status(app: Flask) -> tuple[dict, int]:
    """
    Get health status of the download service.

    Returns:
        Tuple of (health_status_dict, http_status_code)
    """
    download_config = app.container.resolve(SecDownloadConfig)
    health_status = {
        "status": "ok",
        "message": "backend ready",
        "root_path": "unknown",
    }

    try:
        if Path(download_config.root_path).is_dir():
            health_status["root_path"] = "available"
        else:
            health_status["root_path"] = "missing"
            health_status["status"] = "degraded"
    except OSError as e:
        health_status["root_path"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code


def _register_health_endpoint(app: Flask) -> None:
    """
    Register health check endpoint.

    Args:
        app: Flask application
    """

    @app.route("/health", methods=["GET"])
    def health():
        """
        Health check endpoint.
        Returns 503 when the download root is not a readable directory.
        """
        health_status, status_code = _get_health_status(app)
        return jsonify(health_status), status_code
