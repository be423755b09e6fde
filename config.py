"""
Configuration settings for the Mentoring Report Generator
"""

import os
from datetime import timedelta

class Config:
    """Base configuration class"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'mentoring-report-secret-key-2024'

    # Session settings (only the display name and email live in the session)
    PERMANENT_SESSION_LIFETIME = timedelta(hours=2)
    SESSION_COOKIE_SECURE = False  # Set to True in production with HTTPS
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # File upload settings
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max file size
    ALLOWED_EXTENSIONS = {'csv', 'xlsx', 'xls'}
    ALLOWED_MIME_TYPES = {
        'text/csv': 'csv',
        'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet': 'xlsx',
        'application/vnd.ms-excel': 'xls',
    }

    # Report settings
    DEPARTMENT_NAME = os.environ.get('DEPARTMENT_NAME') or 'Department of Computer Science and Engineering'
    INSTITUTION_NAME = (os.environ.get('INSTITUTION_NAME')
                        or 'Chitkara University Institute of Engineering & Technology')
    PDF_HEADER_FILL = (41, 128, 185)

    # Simulated email verification code
    DEMO_OTP = os.environ.get('DEMO_OTP') or '123456'

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'

    # Security settings
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = None

class TestingConfig(Config):
    """Configuration used by the test suite"""
    TESTING = True
    WTF_CSRF_ENABLED = False
    LOG_LEVEL = 'WARNING'
