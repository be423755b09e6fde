"""
Mentoring Report Generator
Main Flask application entry point
"""

import logging

from flask import Flask
from flask_wtf.csrf import CSRFProtect

from config import Config

csrf = CSRFProtect()

def configure_logging(app):
    """Route application and service loggers through one handler at the configured level"""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
    logging.getLogger().setLevel(level)
    app.logger.setLevel(level)

def create_app(config_class=Config):
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)

    # Initialize extensions with app
    csrf.init_app(app)

    # Add CSRF token to template context
    @app.context_processor
    def inject_csrf_token():
        from flask_wtf.csrf import generate_csrf
        return dict(csrf_token=generate_csrf)

    # Register blueprints
    from routes.auth import auth_bp
    from routes.dashboard import dashboard_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)

    @app.errorhandler(413)
    def file_too_large(error):
        from flask import redirect, url_for
        from utils.notifications import notify
        limit_mb = app.config['MAX_CONTENT_LENGTH'] // (1024 * 1024)
        notify('Error', f'File is too large. The limit is {limit_mb} MB', 'error')
        return redirect(url_for('dashboard.index'))

    return app

if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=8000, debug=True, use_reloader=False)
