"""
Authentication service for the Mentoring Report Generator
Simulated sign-in: the display name and email live in the signed session only
"""

import hmac
from datetime import datetime

from models.session import SessionContext
from utils.validators import validate_email, validate_name, validate_otp

class AuthService:
    """Sign-in helpers; there is no account store and no real email delivery"""

    @staticmethod
    def validate_sign_in(display_name, email):
        """Validate the sign-in form"""
        is_valid, message = validate_name(display_name, "Name")
        if not is_valid:
            return False, message

        is_valid, message = validate_email(email)
        if not is_valid:
            return False, message

        return True, "Sign in details accepted"

    @staticmethod
    def verify_otp(otp, expected_otp):
        """Check a one-time code against the configured demo code"""
        is_valid, message = validate_otp(otp)
        if not is_valid:
            return False, message

        if hmac.compare_digest(otp.strip(), expected_otp):
            return True, "Email verified successfully!"

        return False, "Invalid OTP. Please try again."

class SessionManager:
    """Session management utilities"""

    @staticmethod
    def create_session(session, display_name, email):
        """Create the signed-in session, pending email verification"""
        session['display_name'] = display_name.strip()
        session['email'] = email.strip()
        session['email_verified'] = False
        session['login_time'] = datetime.utcnow().isoformat()
        session.permanent = True

    @staticmethod
    def mark_verified(session):
        session['email_verified'] = True

    @staticmethod
    def clear_session(session):
        """Clear user session"""
        session.clear()

    @staticmethod
    def is_authenticated(session):
        """Check if a teacher has signed in"""
        return bool(session.get('email'))

    @staticmethod
    def is_verified(session):
        """Check if the signed-in email passed the simulated verification"""
        return SessionManager.is_authenticated(session) and bool(session.get('email_verified'))

    @staticmethod
    def get_context(session):
        """Build the SessionContext passed to views and templates"""
        return SessionContext(
            display_name=session.get('display_name'),
            email=session.get('email'),
            email_verified=bool(session.get('email_verified')),
        )
