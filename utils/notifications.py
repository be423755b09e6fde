"""
User notifications for the Mentoring Report Generator
Notifications are flashed messages rendered as transient toasts
"""

from flask import flash, get_flashed_messages

SEVERITIES = ('success', 'error', 'warning', 'info')

def notify(title, description, severity='success'):
    """Queue a {title, description} notification with the given severity"""
    if severity not in SEVERITIES:
        severity = 'info'
    flash({'title': title, 'description': description}, severity)

def notify_error(error):
    """Queue a notification for a ReportError"""
    notify(error.title, error.message, 'error' if error.title == 'Error' else 'warning')

def pop_notifications():
    """Return pending notifications as dicts with title, description and severity"""
    notifications = []
    for severity, payload in get_flashed_messages(with_categories=True):
        if isinstance(payload, dict):
            notifications.append({
                'title': payload.get('title', ''),
                'description': payload.get('description', ''),
                'severity': severity,
            })
        else:
            notifications.append({'title': '', 'description': str(payload), 'severity': severity})
    return notifications
