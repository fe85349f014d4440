"""
Admin settings routes
"""
from flask import render_template, request, Blueprint, flash, redirect, url_for
from routes.admin.auth import superadmin_required
from models import db
from utils.settings_helper import get_setting, get_flag, set_setting

settings_bp = Blueprint('admin_settings', __name__, url_prefix='/admin')

@settings_bp.route('/settings', methods=['GET', 'POST'])
@superadmin_required
def settings():
    """Site settings: branding, banner, contact form and maintenance switches"""
    if request.method == 'POST':
        set_setting('website_name', request.form.get('website_name', '').strip(), 'Website Name')
        set_setting('website_url', request.form.get('website_url', '').strip(), 'Website URL')
        
        announcement_banner = request.form.get('announcement_banner', '').strip()
        set_setting('announcement_banner', announcement_banner, 'Announcement banner (leave blank to hide)')
        
        contact_form_enabled = request.form.get('contact_form_enabled') == 'on'
        set_setting('contact_form_enabled', '1' if contact_form_enabled else '0', 'Contact form enabled')
        
        maintenance_mode = request.form.get('maintenance_mode') == 'on'
        set_setting('maintenance_mode', '1' if maintenance_mode else '0', 'Maintenance Mode')

        try:
            db.session.commit()
            flash('Settings saved successfully!', 'success')
            return redirect(url_for('admin_settings.settings'))
        except Exception as e:
            db.session.rollback()
            flash(f'Error saving settings: {e}', 'error')
    
    settings_dict = {
        'website_name': get_setting('website_name'),
        'website_url': get_setting('website_url'),
        'announcement_banner': get_setting('announcement_banner'),
        'contact_form_enabled': get_flag('contact_form_enabled'),
        'maintenance_mode': get_flag('maintenance_mode'),
    }
    
    return render_template('admin/settings.html', settings=settings_dict)
