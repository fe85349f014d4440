"""
Admin dashboard routes
"""
from datetime import datetime, timedelta

from flask import render_template, Blueprint
from routes.admin.auth import admin_required, get_current_admin
from models.contact import ContactMessage, ContactSettings
from models.admin_notification import AdminNotification
from utils.settings_helper import get_flag

admin_dashboard_bp = Blueprint('admin_dashboard', __name__, url_prefix='/admin')

@admin_dashboard_bp.route('/')
@admin_dashboard_bp.route('/dashboard')
@admin_required
def dashboard():
    """Admin dashboard: inbox and contact section at a glance"""
    admin = get_current_admin()

    # Timezone-safe: use UTC for all date comparisons
    today_start = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    week_start = today_start - timedelta(days=7)

    stats = {
        'total_messages': ContactMessage.query.count(),
        'unread_messages': ContactMessage.query.filter_by(is_read=False).count(),
        'messages_today': ContactMessage.query.filter(ContactMessage.created_at >= today_start).count(),
        'messages_week': ContactMessage.query.filter(ContactMessage.created_at >= week_start).count(),
        'unread_notifications': AdminNotification.unread_count(),
    }

    contact_settings = ContactSettings.current()
    latest_messages = ContactMessage.query.order_by(ContactMessage.created_at.desc()).limit(5).all()

    return render_template(
        'admin/dashboard.html',
        admin=admin,
        stats=stats,
        contact_published=bool(contact_settings and contact_settings.is_published),
        contact_form_enabled=get_flag('contact_form_enabled'),
        latest_messages=latest_messages,
    )
