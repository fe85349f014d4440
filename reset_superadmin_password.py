"""
Reset superadmin password when forgotten.
Run: python reset_superadmin_password.py
     or: python reset_superadmin_password.py "YourNewPassword"
"""
import sys
import getpass

def main():
    from app import create_app
    from models import db
    from models.admin import Admin
    from utils.validators import validate_password

    app = create_app()
    with app.app_context():
        # Seeded superadmin first, then any superadmin
        seed_email = (app.config.get('SEED_ADMIN_EMAIL') or '').lower()
        admin = Admin.query.filter_by(email=seed_email).first()
        if not admin:
            admin = Admin.query.filter_by(role='superadmin').first()
        if not admin:
            print("No superadmin found. Check your database.")
            return

        if len(sys.argv) >= 2:
            new_password = sys.argv[1]
        else:
            new_password = getpass.getpass("Enter new password for superadmin: ")
            confirm = getpass.getpass("Confirm new password: ")
            if new_password != confirm:
                print("Passwords do not match. Aborted.")
                return

        ok, error = validate_password(new_password)
        if not ok:
            print(error, "Aborted.")
            return

        admin.set_password(new_password)
        admin.is_active = True
        try:
            db.session.commit()
            print("[SUCCESS] Superadmin password has been reset.")
            print("  Email:    ", admin.email)
            print("  Username:", admin.username)
        except Exception as e:
            db.session.rollback()
            print("[ERROR]", e)

if __name__ == '__main__':
    main()
