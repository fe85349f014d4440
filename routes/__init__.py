"""
Routes package for the portfolio site
"""
from routes.public import public_bp
from routes.admin.auth import admin_auth_bp
from routes.admin.dashboard import admin_dashboard_bp
from routes.admin.contact import admin_contact_bp
from routes.admin.settings import settings_bp
from routes.admin.notifications import admin_notifications_bp

__all__ = [
    'public_bp',
    'admin_auth_bp',
    'admin_dashboard_bp',
    'admin_contact_bp',
    'settings_bp',
    'admin_notifications_bp',
]
