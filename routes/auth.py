"""
Authentication routes for the Mentoring Report Generator
Handles the landing page, simulated sign-in, email verification and logout
"""

from functools import wraps

from flask import Blueprint, current_app, redirect, render_template, request, session, url_for

from services.auth_service import AuthService, SessionManager
from utils.notifications import notify, pop_notifications

auth_bp = Blueprint('auth', __name__)

@auth_bp.route('/')
def index():
    """Landing page"""
    return render_template('auth/index.html')

@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Sign-in page and handler"""
    if SessionManager.is_verified(session):
        return redirect(url_for('dashboard.index'))

    if request.method == 'POST':
        display_name = request.form.get('display_name', '').strip()
        email = request.form.get('email', '').strip()

        is_valid, message = AuthService.validate_sign_in(display_name, email)
        if not is_valid:
            notify('Error', message, 'error')
            return render_template('auth/login.html', display_name=display_name, email=email)

        SessionManager.create_session(session, display_name, email)
        current_app.logger.info("Sign-in started for %s", email)
        notify('OTP Sent', f"A 6-digit OTP has been sent to {email}.", 'info')
        return redirect(url_for('auth.verify_email'))

    return render_template('auth/login.html')

@auth_bp.route('/verify-email', methods=['GET', 'POST'])
def verify_email():
    """Simulated email verification"""
    if not SessionManager.is_authenticated(session):
        notify('Error', 'Please sign in first', 'error')
        return redirect(url_for('auth.login'))

    if request.method == 'POST':
        success, message = AuthService.verify_otp(
            request.form.get('otp', ''), current_app.config['DEMO_OTP']
        )
        if success:
            SessionManager.mark_verified(session)
            notify('Success', message, 'success')
            return redirect(url_for('dashboard.index'))
        notify('Error', message, 'error')

    return render_template('auth/verify_email.html')

@auth_bp.route('/resend-otp', methods=['POST'])
def resend_otp():
    if not SessionManager.is_authenticated(session):
        return redirect(url_for('auth.login'))
    notify('OTP Sent', 'A new OTP has been sent to your email address.', 'info')
    return redirect(url_for('auth.verify_email'))

@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Logout handler; clears everything kept in the session"""
    SessionManager.clear_session(session)
    return redirect(url_for('auth.login'))

# Authentication decorator
def login_required(f):
    """Require a signed-in teacher with a verified email"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not SessionManager.is_authenticated(session):
            notify('Error', 'Please sign in to access the dashboard', 'error')
            return redirect(url_for('auth.login'))

        if not SessionManager.is_verified(session):
            notify('Error', 'Please verify your email first', 'error')
            return redirect(url_for('auth.verify_email'))

        return f(*args, **kwargs)
    return decorated_function

# Context processor to make session info available in templates
@auth_bp.app_context_processor
def inject_user():
    """Inject the session context and pending notifications into template context"""
    return {
        'session_context': SessionManager.get_context(session),
        'pop_notifications': pop_notifications,
    }
