# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from cloudtraffic.infrastructure.container import Container
from cloudtraffic.shared.config import AppConfig, load_config
from cloudtraffic.shared.logging import logger, setup_logging
from cloudtraffic.shared.middleware.error_handler import configure_error_handling
from cloudtraffic.shared.middleware.rate_limit import configure_rate_limiting
from cloudtraffic.shared.middleware.request_logger import configure_request_logging
from cloudtraffic.shared.middleware.security_headers import configure_security_headers


def create_app(
    config: AppConfig | None = None,
    container: Container | None = None,
) -> Flask:
    if container is None:
        container = Container(config or load_config())
    config = container.config

    setup_logging(level=config.log_level, log_file=config.log_file)

    app = Flask(__name__)
    if config.security.trusted_proxies:
        app.wsgi_app = ProxyFix(  # type: ignore[method-assign]
            app.wsgi_app,
            x_for=config.security.trusted_proxies,
            x_proto=config.security.trusted_proxies,
        )
    app.extensions["cloudtraffic.container"] = container

    configure_request_logging(app, debug_mode=config.debug_logging)
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_rate_limiting(app, container.global_rate_limiter)
    configure_security_headers(app, enable_hsts=config.security.enable_hsts)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    auth_bp = container.auth_controller.as_blueprint()
    app.register_blueprint(auth_bp)
    app.register_blueprint(auth_bp, url_prefix="/api/auth", name="auth_api")

    credits_bp = container.credits_controller.as_blueprint()
    app.register_blueprint(credits_bp, url_prefix="/traffic")
    app.register_blueprint(credits_bp, url_prefix="/api/traffic", name="credits_api")

    traffic_bp = container.traffic_controller.as_blueprint()
    app.register_blueprint(traffic_bp)
    app.register_blueprint(traffic_bp, url_prefix="/api", name="traffic_api")

    app.register_blueprint(container.misc_controller.as_blueprint())

    # Touch the engine so the schema exists before the first request.
    container.engine

    logger.info(f"Flask app initialized env={config.app_env}")
    return app


def main() -> None:
    config = load_config()
    app = create_app(config)
    app.run(host=config.host, port=config.port, debug=False)


if __name__ == "__main__":
    main()
