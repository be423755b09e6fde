"""
Session context for the Mentoring Report Generator
"""

DEFAULT_DISPLAY_NAME = 'Teacher'

class SessionContext:
    """Display name and email of the signed-in teacher, passed explicitly to views"""

    def __init__(self, display_name=None, email=None, email_verified=False):
        self.display_name = display_name or DEFAULT_DISPLAY_NAME
        self.email = email
        self.email_verified = email_verified

    @property
    def is_authenticated(self):
        return bool(self.email)

    @property
    def is_verified(self):
        return self.is_authenticated and self.email_verified

    def __repr__(self):
        return f'<SessionContext {self.display_name} {self.email}>'
