"""
Validation utilities for the Mentoring Report Generator
Each validator returns a (is_valid, message) pair
"""

import re

from models.report import REPORT_TYPES

def validate_name(name, field_name="Name"):
    """Validate person name"""
    if not name or len(name.strip()) == 0:
        return False, f"{field_name} is required"

    if len(name) > 100:
        return False, f"{field_name} must be 100 characters or less"

    # Allow letters in any script, spaces, and common name characters
    if not re.match(r"^(?:[^\W\d_]|[\s.\-'])+$", name):
        return False, f"{field_name} can only contain letters, spaces, periods, hyphens, and apostrophes"

    return True, f"Valid {field_name.lower()}"

def validate_email(email):
    """Validate email address format"""
    if not email or len(email.strip()) == 0:
        return False, "Email is required"

    if len(email) > 254:
        return False, "Email must be 254 characters or less"

    if not re.match(r'^[^@\s]+@[^@\s]+\.[^@\s]+$', email.strip()):
        return False, "Please enter a valid email address"

    return True, "Valid email"

def validate_otp(otp):
    """Validate a six digit one-time code"""
    if not otp or not re.match(r'^\d{6}$', otp.strip()):
        return False, "Please enter a valid 6-digit OTP"
    return True, "Valid OTP"

def validate_report_type(report_type):
    """Validate report type against the fixed list"""
    if not report_type:
        return False, "Please select a report type"

    if report_type not in REPORT_TYPES:
        return False, f"Report type must be one of: {', '.join(REPORT_TYPES)}"

    return True, "Valid report type"

def file_extension(filename):
    """Lower-case extension without the dot, or '' when there is none"""
    if not filename or '.' not in filename:
        return ''
    return filename.rsplit('.', 1)[1].strip().lower()

