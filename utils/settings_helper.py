"""
Settings helper: read app settings from DB for use in app context and routes.
"""
from models import db
from models.settings import Settings

DEFAULT_SETTINGS = {
    'website_name': 'Portfolio',
    'website_url': 'http://localhost:8080',
    'contact_form_enabled': '1',
    'maintenance_mode': '0',
    'announcement_banner': '',
}


def get_setting(key, default=None):
    """Get setting value by key. Safe to call from any request context."""
    if default is None:
        default = DEFAULT_SETTINGS.get(key, '')
    try:
        setting = Settings.query.filter_by(key=key).first()
        return setting.value if setting and setting.value is not None else default
    except Exception:
        return default


def get_flag(key):
    """Boolean settings are stored as '1' / '0'"""
    return get_setting(key) == '1'


def set_setting(key, value, description=''):
    """Set or update setting value (caller commits)"""
    setting = Settings.query.filter_by(key=key).first()
    if setting:
        setting.value = value
        if description:
            setting.description = description
    else:
        setting = Settings(key=key, value=value, description=description)
        db.session.add(setting)
    return setting
