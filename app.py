"""
Main Flask application entry point for the portfolio site
"""
import os
from flask import Flask, jsonify, request, redirect
from config import Config
from models import db
from utils.mail import mail


def create_app(config_class=Config):
    """Application factory pattern. DB init runs inside app_context; non-fatal on failure."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)
    mail.init_app(app)

    @app.errorhandler(500)
    def handle_500_error(e):
        if request.path.startswith("/contact/") or request.is_json:
            return jsonify({"success": False, "message": "Internal server error. Please try again later."}), 500
        return "Internal server error", 500

    # Create tables and seed only inside app context; do not crash if DB temporarily unavailable
    with app.app_context():
        try:
            db.create_all()
            seed_contact_settings()
            seed_admin(app)
        except Exception as e:
            app.logger.warning("Database init/seed skipped (non-fatal): %s", e)

    from routes import (public_bp, admin_auth_bp, admin_dashboard_bp, admin_contact_bp,
                        settings_bp, admin_notifications_bp)

    app.register_blueprint(public_bp)
    app.register_blueprint(admin_auth_bp)
    app.register_blueprint(admin_dashboard_bp)
    app.register_blueprint(admin_contact_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(admin_notifications_bp)

    # Inject site settings into all templates
    @app.context_processor
    def inject_app_settings():
        from utils.settings_helper import get_setting, get_flag
        return {
            'app_settings': {
                'website_name': get_setting('website_name'),
                'website_url': get_setting('website_url'),
                'announcement_banner': get_setting('announcement_banner').strip(),
                'contact_form_enabled': get_flag('contact_form_enabled'),
            }
        }

    # Maintenance mode: block public pages (admin and static always allowed)
    @app.before_request
    def check_maintenance():
        from utils.settings_helper import get_flag
        if not get_flag('maintenance_mode'):
            return None
        path = request.path
        if path.startswith('/admin') or path.startswith('/static') or path == '/maintenance':
            return None
        return redirect('/maintenance')

    return app

def seed_contact_settings():
    """Create the single contact section row (unpublished) if missing"""
    from models.contact import ContactSettings

    if ContactSettings.query.count() > 0:
        return

    db.session.add(ContactSettings(
        heading='Contact',
        subheading="Have a project in mind? Send a message and I'll reply soon.",
        socials={},
        is_published=False,
    ))
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

def seed_admin(app):
    """Ensure the default superadmin exists. Password is only set when the account is created."""
    from models.admin import Admin, ROLE_SUPERADMIN

    seed_email = (app.config.get("SEED_ADMIN_EMAIL") or "").strip().lower()
    if not seed_email:
        return
    seed_username = (app.config.get("SEED_ADMIN_USERNAME") or seed_email.split("@")[0]).strip()

    admin = Admin.query.filter(Admin.email.ilike(seed_email)).first()
    if admin:
        return

    admin = Admin(
        username=seed_username,
        email=seed_email,
        role=ROLE_SUPERADMIN,
        is_active=True,
    )
    admin.set_password(app.config.get("SEED_ADMIN_PASSWORD"))
    db.session.add(admin)

    try:
        db.session.commit()
        app.logger.info("Superadmin ready. Email: %s", seed_email)
    except Exception as e:
        db.session.rollback()
        app.logger.error("Error seeding superadmin: %s", e)

# WSGI entry point (Railway/Render/cPanel): gunicorn app:app
app = create_app()
application = app

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "false").lower() in ("true", "1"))
