"""
Admin authentication routes
"""
from functools import wraps

from flask import render_template, request, redirect, url_for, flash, Blueprint, session, current_app
from models import db
from models.admin import Admin
from utils.validators import validate_email
from sqlalchemy import func

admin_auth_bp = Blueprint('admin_auth', __name__, url_prefix='/admin')

def admin_required(f):
    """Decorator to require admin login and validate admin exists"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'admin_id' not in session:
            flash('Please log in to access the admin panel.', 'error')
            return redirect(url_for('admin_auth.login', next=request.path))
        
        # Validate admin still exists and is active
        admin = db.session.get(Admin, session.get('admin_id'))
        
        if not admin:
            session.clear()
            flash('Admin account not found. Please log in again.', 'error')
            return redirect(url_for('admin_auth.login'))
        
        if not admin.is_active:
            session.clear()
            flash('Your admin account is inactive. Please contact support.', 'error')
            return redirect(url_for('admin_auth.login'))
        
        return f(*args, **kwargs)
    return decorated_function

def superadmin_required(f):
    """Decorator to require superadmin role"""
    @wraps(f)
    @admin_required
    def decorated_function(*args, **kwargs):
        admin = get_current_admin()
        if not admin.is_superadmin:
            from utils.notifications import notify_unauthorized_access
            notify_unauthorized_access(admin.id, request.path)
            flash('Access denied. Superadmin privileges required.', 'error')
            return redirect(url_for('admin_dashboard.dashboard')), 403
        return f(*args, **kwargs)
    return decorated_function

def get_current_admin():
    """Helper function to get current admin from session"""
    if 'admin_id' not in session:
        return None
    return db.session.get(Admin, session.get('admin_id'))

def _safe_next(next_page):
    """Only follow local redirects"""
    if next_page and next_page.startswith('/') and not next_page.startswith('//'):
        return next_page
    return None

@admin_auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login"""
    if 'admin_id' in session:
        return redirect(url_for('admin_dashboard.dashboard'))
    
    if request.method == 'POST':
        login_id = request.form.get('email', '').strip()  # Can be email or username
        password = request.form.get('password', '')
        
        if not login_id or not password:
            flash('Please enter both email/username and password.', 'error')
            return render_template('admin/login.html')
        
        if '@' in login_id and not validate_email(login_id):
            flash('Please enter a valid email address.', 'error')
            return render_template('admin/login.html')
        
        # Find admin: try email first (case-insensitive), then username (case-insensitive)
        admin = None
        if '@' in login_id:
            admin = Admin.query.filter(func.lower(Admin.email) == login_id.lower()).first()
        if not admin:
            admin = Admin.query.filter(func.lower(Admin.username) == login_id.lower()).first()
        
        if admin and admin.check_password(password):
            if not admin.is_active:
                flash('Your admin account is inactive. Please contact support.', 'error')
                return render_template('admin/login.html')
            
            # Keep the visitor's contact form state out of the admin session
            session.clear()
            session['admin_id'] = admin.id
            session['admin_username'] = admin.username
            session['admin_role'] = admin.role
            session.permanent = True
            
            admin.record_login()
            try:
                db.session.commit()
            except Exception as e:
                db.session.rollback()
                current_app.logger.warning("Could not record admin login time: %s", e)
            
            flash(f'Welcome back, {admin.username}!', 'success')
            return redirect(_safe_next(request.args.get('next')) or url_for('admin_dashboard.dashboard'))
        
        current_app.logger.info("Failed admin login for %s", login_id)
        flash('Invalid email or password.', 'error')
    
    return render_template('admin/login.html')

@admin_auth_bp.route("/logout")
def logout():
    """Admin logout"""
    session.clear()
    flash("You have been logged out successfully.", "success")
    return redirect(url_for("admin_auth.login"))
