"""
Flask Application Factory
"""

from flask import Flask, jsonify, send_from_directory
from logging.handlers import RotatingFileHandler
from werkzeug.exceptions import HTTPException
from config import config
from extensions import db, migrate, jwt, bcrypt, cors, limiter, mail
import logging
import os


def create_app(config_name=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])

    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)
    cors.init_app(app, resources={
        r"/api/*": {
            "origins": app.config['CORS_ORIGINS'],
            "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"]
        }
    })
    limiter.init_app(app)
    mail.init_app(app)

    # JWT user loading callbacks
    from complaintdesk.utils import auth  # noqa: F401

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Create database tables
    with app.app_context():
        from complaintdesk import models  # noqa: F401
        db.create_all()

    return app


def configure_logging(app):
    """Console logging always, plus a rotating file when LOG_FILE is set"""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    app.logger.setLevel(level)
    for handler in app.logger.handlers:
        handler.setFormatter(formatter)

    log_file = app.config.get('LOG_FILE')
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        app.logger.addHandler(file_handler)


def register_blueprints(app):
    """Register Flask blueprints"""
    from complaintdesk.api.auth import auth_bp
    from complaintdesk.api.complaints import complaints_bp
    from complaintdesk.api.feedback import feedback_bp
    from complaintdesk.api.admin import admin_bp, admin_users_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(complaints_bp, url_prefix='/api/complaints')
    app.register_blueprint(feedback_bp, url_prefix='/api/feedback')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(admin_users_bp, url_prefix='/api/admin/users')

    # Health check endpoint
    @app.route('/health')
    def health_check():
        return jsonify({'status': 'healthy', 'message': 'API is running'}), 200

    @app.route('/')
    def index():
        return jsonify({
            'message': 'Welcome to the ComplaintDesk API',
            'version': '1.0.0',
            'endpoints': {
                'auth': '/api/auth',
                'complaints': '/api/complaints',
                'feedback': '/api/feedback',
                'admin': '/api/admin',
                'uploads': '/uploads'
            }
        }), 200

    @app.route('/uploads/<path:filename>')
    def uploaded_file(filename):
        """Serve stored attachments as static files"""
        from complaintdesk.services.storage_service import LocalStorageService
        return send_from_directory(LocalStorageService.upload_folder(), filename)


def register_error_handlers(app):
    """Register error handlers"""

    @app.errorhandler(400)
    def bad_request(error):
        return jsonify({'error': 'Bad Request', 'message': str(error)}), 400

    @app.errorhandler(401)
    def unauthorized(error):
        return jsonify({'error': 'Unauthorized', 'message': 'Authentication required'}), 401

    @app.errorhandler(403)
    def forbidden(error):
        return jsonify({'error': 'Forbidden', 'message': 'Insufficient permissions'}), 403

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not Found', 'message': 'Resource not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method Not Allowed', 'message': str(error)}), 405

    @app.errorhandler(413)
    def payload_too_large(error):
        return jsonify({'error': 'Payload Too Large', 'message': 'Uploaded file is too large'}), 413

    @app.errorhandler(429)
    def rate_limited(error):
        return jsonify({'error': 'Too Many Requests', 'message': str(error.description)}), 429

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'error': 'Internal Server Error', 'message': 'An unexpected error occurred'}), 500

    @app.errorhandler(Exception)
    def handle_exception(error):
        if isinstance(error, HTTPException):
            return jsonify({'error': error.name, 'message': error.description}), error.code
        db.session.rollback()
        app.logger.error(f'Unhandled exception: {str(error)}')
        return jsonify({'error': 'Internal Server Error', 'message': str(error)}), 500
