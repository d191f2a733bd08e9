from flask import Flask, send_from_directory
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker, scoped_session
from dotenv import load_dotenv
from datetime import timedelta
from typing import Optional, Dict, Any
import os

load_dotenv()

db_engine = None
SessionLocal = None
jwt = JWTManager()

BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def _error_payload(status: int, title: str, detail: str, error_type: Optional[str] = None):
    error = {'status': status, 'title': title, 'detail': detail}
    if error_type:
        error['type'] = error_type
    return {'error': error}


def create_app(config: Optional[Dict[str, Any]] = None):
    global db_engine, SessionLocal
    app = Flask(__name__)

    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret-change-me-in-production!')
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(days=7)
    app.config['DATABASE_URL'] = os.getenv('DATABASE_URL', 'sqlite:///dev.db')
    app.config['UPLOAD_FOLDER'] = os.getenv('UPLOAD_FOLDER', os.path.join(BACKEND_DIR, 'uploads'))
    app.config['ALLOWED_EXTENSIONS'] = {'png', 'jpg', 'jpeg', 'gif', 'jfif'}
    app.config['MAX_CONTENT_LENGTH'] = 5 * 1024 * 1024  # 5MB per request

    if config:
        # allow tests or callers to override default config values
        app.config.update(config)

    # Database
    db_url = app.config['DATABASE_URL']
    if db_url.endswith(':memory:'):
        # Ensure a single shared in-memory SQLite database across all sessions
        db_engine = create_engine(
            db_url,
            echo=False,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        db_engine = create_engine(db_url, echo=False, future=True)
    SessionLocal = scoped_session(sessionmaker(bind=db_engine, expire_on_commit=False, autoflush=False))

    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    jwt.init_app(app)

    @app.teardown_appcontext
    def remove_session(exc):
        SessionLocal.remove()

    # flask-jwt-extended answers 422 for malformed tokens by default; every token failure is a 401 here
    @jwt.unauthorized_loader
    def missing_token(reason):
        return _error_payload(401, 'Unauthorized', reason, 'Unauthorized'), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return _error_payload(401, 'Unauthorized', reason, 'Unauthorized'), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return _error_payload(401, 'Unauthorized', 'Token has expired', 'Unauthorized'), 401

    from .routes.auth import auth_bp
    from .routes.complaints import complaints_bp
    from .routes.feedback import feedback_bp
    from .routes.reports import reports_bp
    from .routes.technicians import tech_bp
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(complaints_bp, url_prefix='/api/complaints')
    app.register_blueprint(feedback_bp, url_prefix='/api/feedback')
    app.register_blueprint(reports_bp, url_prefix='/api/reports')
    app.register_blueprint(tech_bp, url_prefix='/api/technicians')

    @app.route('/healthz')
    def health():
        return {'status': 'ok'}

    @app.route('/uploads/<path:filename>')
    def uploaded_file(filename):
        return send_from_directory(app.config['UPLOAD_FOLDER'], filename)

    # Unified error handler producing standardized JSON shape
    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, HTTPException):
            return _error_payload(e.code, e.name, e.description, getattr(e, 'error_type', None)), e.code
        # Unhandled exception
        app.logger.exception('Unhandled exception')
        if SessionLocal is not None:
            SessionLocal.rollback()
        return _error_payload(500, 'Internal Server Error', 'Unexpected error'), 500

    from .openapi import build_openapi_spec

    @app.route('/openapi.json')
    def openapi_spec():
        return build_openapi_spec()

    @app.route('/docs')
    def docs_index():
        # Lightweight HTML referencing Redoc CDN (no local install) for quick browsing
        return (
            "<!DOCTYPE html><html><head><title>Campus Complaints API</title>"
            "<link rel=\"stylesheet\" href=\"https://cdn.jsdelivr.net/npm/redoc@next/bundles/redoc.standalone.css\" />"
            "</head><body><redoc spec-url='/openapi.json'></redoc>"
            "<script src='https://cdn.jsdelivr.net/npm/redoc@next/bundles/redoc.standalone.js'></script>"
            "</body></html>"
        )

    return app


def get_db():
    return SessionLocal()
