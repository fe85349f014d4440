"""
Models package for the portfolio site
"""
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Import all models here to ensure they're registered
from models.admin import Admin
from models.settings import Settings
from models.contact import ContactMessage, ContactSettings
from models.admin_notification import AdminNotification

__all__ = [
    'db',
    'Admin',
    'Settings',
    'ContactMessage',
    'ContactSettings',
    'AdminNotification',
]
