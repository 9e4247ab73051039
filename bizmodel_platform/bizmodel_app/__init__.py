"""bizmodel_app package – application factory and blueprint registration."""

from __future__ import annotations

import os
from time import perf_counter

import click
from flask import Flask, g, request
from flask_jwt_extended import JWTManager
from sqlalchemy import event, inspect

from config import resolve_config
from .blueprints import BLUEPRINTS
from .extensions import cors, db, jwt, limiter, migrate
from .logging_config import assign_request_id, configure_logging
from .metrics import record_request, set_retry_queue_size
from .utils import hash_password


def create_app(config_name: str | None = None) -> Flask:
    """Application factory used by both CLI and runtime servers."""

    app = Flask(__name__)
    _configure_app(app, config_name)
    configure_logging(app)
    _register_extensions(app)
    _register_blueprints(app)
    _register_retry_handlers()
    _register_shellcontext(app)
    _register_cli(app)
    _register_bootstrap(app)
    _register_request_hooks(app)

    return app


def _configure_app(app: Flask, config_name: str | None) -> None:
    env_name = config_name or os.getenv("FLASK_CONFIG")
    config_obj = resolve_config(env_name)
    app.config.from_object(config_obj)


def _register_extensions(app: Flask) -> None:
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    _configure_jwt(jwt)
    _configure_sqlite_engine(app)
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )
    limiter.default_limits = app.config.get("RATE_LIMIT_DEFAULTS", [])
    limiter.init_app(app)


def _register_blueprints(app: Flask) -> None:
    for blueprint, prefix in BLUEPRINTS:
        app.register_blueprint(blueprint, url_prefix=prefix)


def _register_retry_handlers() -> None:
    from .services import email_service

    email_service.register_retry_handlers()


def _register_shellcontext(app: Flask) -> None:
    from . import models

    @app.shell_context_processor
    def shell_context():
        return {"db": db, "models": models}


def _configure_jwt(jwt_manager: JWTManager) -> None:
    from flask import jsonify

    from .models import User

    @jwt_manager.user_lookup_loader
    def user_lookup_callback(_jwt_header, jwt_data):
        identity = jwt_data.get("sub")
        if identity is None:
            return None
        try:
            identity_int = int(identity)
        except (TypeError, ValueError):
            return None
        return db.session.get(User, identity_int)

    @jwt_manager.user_lookup_error_loader
    def user_lookup_error_callback(_jwt_header, _jwt_data):
        return jsonify({"message": "User not found"}), 401

    @jwt_manager.expired_token_loader
    def expired_token_callback(jwt_header, jwt_data):
        return jsonify({"message": "Token has expired"}), 401

    @jwt_manager.invalid_token_loader
    def invalid_token_callback(error_string):
        return jsonify({"message": "Invalid token", "error": error_string}), 401

    @jwt_manager.unauthorized_loader
    def missing_token_callback(error_string):
        return jsonify({"message": "Missing authorization token"}), 401


def _register_bootstrap(app: Flask) -> None:
    @app.before_request
    def ensure_bootstrap():
        if not app.config.get("_SCHEMA_READY"):
            _ensure_schema(app)
            app.config["_SCHEMA_READY"] = True

        if app.config.get("_ADMIN_READY") or not app.config.get("ADMIN_AUTO_SEED", True):
            return
        _ensure_admin(app)
        app.config["_ADMIN_READY"] = True


def _register_request_hooks(app: Flask) -> None:
    @app.before_request
    def start_request():
        assign_request_id()
        g.request_started_at = perf_counter()

    @app.after_request
    def finalize(response):
        request_id = getattr(g, "request_id", None)
        if request_id:
            response.headers["X-Request-ID"] = request_id
        started = getattr(g, "request_started_at", None)
        latency = perf_counter() - started if started else 0.0
        endpoint = request.endpoint or request.path
        record_request(request.method, endpoint, response.status_code, latency)
        return response


def _configure_sqlite_engine(app: Flask) -> None:
    uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if not uri.startswith("sqlite"):
        return
    busy_timeout_ms = int(app.config.get("SQLITE_BUSY_TIMEOUT_MS", 15000))
    in_memory = ":memory:" in uri

    with app.app_context():
        engine = db.engine

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_connection, connection_record):  # pragma: no cover
            cursor = dbapi_connection.cursor()
            try:
                if not in_memory:
                    cursor.execute("PRAGMA journal_mode=WAL;")
                    cursor.execute("PRAGMA synchronous=NORMAL;")
                cursor.execute(f"PRAGMA busy_timeout={busy_timeout_ms};")
                cursor.execute("PRAGMA foreign_keys=ON;")
            finally:
                cursor.close()


def _ensure_schema(app: Flask) -> None:
    with app.app_context():
        db.create_all()


def _ensure_admin(app: Flask, email: str | None = None, password: str | None = None) -> bool:
    """Create the default admin account if no admin exists. Returns True when created."""

    from .models import User

    with app.app_context():
        if not inspect(db.engine).has_table("users"):
            return False
        email = (email or app.config["ADMIN_DEFAULT_EMAIL"]).strip().lower()
        if User.query.filter_by(role="admin").first() or User.query.filter_by(email=email).first():
            return False
        admin = User(
            email=email,
            password_hash=hash_password(password or app.config["ADMIN_DEFAULT_PASSWORD"]),
            first_name="Admin",
            role="admin",
        )
        db.session.add(admin)
        db.session.commit()
        app.logger.info("Seeded admin account %s", email)
        return True


def _register_cli(app: Flask) -> None:
    @app.cli.command("seed-admin")
    @click.option("--email", help="Admin email (defaults to ADMIN_DEFAULT_EMAIL).")
    @click.option("--password", help="Admin password (defaults to ADMIN_DEFAULT_PASSWORD).")
    def seed_admin(email: str | None, password: str | None) -> None:
        """Create the admin account used for the dashboard."""

        _ensure_schema(app)
        if _ensure_admin(app, email, password):
            click.echo("Seeded admin account.")
        else:
            click.echo("Admin account already exists; nothing to do.")

    @app.cli.group("cleanup")
    def cleanup_group():
        """Data retention commands."""

    @cleanup_group.command("expired")
    @click.option("--dry-run", is_flag=True, default=False, help="Report counts without deleting.")
    def cleanup_expired(dry_run: bool) -> None:
        """Delete expired guest attempts and temporary accounts."""

        from .services import retention_service

        with app.app_context():
            _ensure_schema(app)
            result = retention_service.cleanup_expired_data(dry_run=dry_run)
        prefix = "Would remove" if dry_run else "Removed"
        click.echo(
            f"{prefix} {result['attempts']} attempts, {result['temporary_users']} temporary users, "
            f"{result['scores']} scores; relocked {result['relocked_reports']} reports."
        )

    @app.cli.group("retry-queue")
    def retry_queue_group():
        """Retry queue maintenance."""

    @retry_queue_group.command("process")
    def retry_queue_process() -> None:
        from .services import retry_queue

        with app.app_context():
            _ensure_schema(app)
            counts = retry_queue.process_queue()
        click.echo(
            "Succeeded: {succeeded}, failed: {failed}, expired: {expired}, exhausted: {exhausted}".format(**counts)
        )

    @retry_queue_group.command("size")
    def retry_queue_size() -> None:
        from .services import retry_queue

        with app.app_context():
            _ensure_schema(app)
            size = retry_queue.queue_size()
            set_retry_queue_size(size)
        click.echo(f"Retry queue size: {size}")

    @retry_queue_group.command("clear")
    @click.confirmation_option(prompt="Delete every queued job?")
    def retry_queue_clear() -> None:
        from .services import retry_queue

        with app.app_context():
            _ensure_schema(app)
            removed = retry_queue.clear_queue()
        click.echo(f"Removed {removed} queued jobs.")
