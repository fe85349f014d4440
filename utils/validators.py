"""
Input validators shared by public and admin forms
"""
import re

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
URL_RE = re.compile(r'^https?://\S+$', re.IGNORECASE)


def validate_email(email):
    """Loose shape check; delivery is the real test"""
    if not email or len(email) > 200:
        return False
    return EMAIL_RE.match(email) is not None


def validate_url(url):
    """Blank is allowed (field cleared); otherwise require http(s)"""
    if not url:
        return True
    return URL_RE.match(url) is not None


def validate_password(password):
    """Return (is_valid, error_message)"""
    if not password or len(password) < 8:
        return False, 'Password must be at least 8 characters.'
    if password.isdigit() or password.isalpha():
        return False, 'Password must contain both letters and numbers.'
    return True, ''
