"""
Create an admin console account, or reset an existing one.
Run: python create_admin.py EMAIL USERNAME [--superadmin]
"""
import sys
import getpass

def create_admin(email, username, password, role='editor'):
    """Create or reset admin user"""
    from app import create_app
    from models import db
    from models.admin import Admin

    app = create_app()
    with app.app_context():
        admin = Admin.query.filter_by(email=email.lower()).first()

        if admin:
            admin.set_password(password)
            admin.is_active = True
            admin.role = role
            db.session.commit()
            print("[SUCCESS] Admin user password reset successfully!")
        else:
            admin = Admin(
                username=username,
                email=email.lower(),
                role=role,
                is_active=True
            )
            admin.set_password(password)
            db.session.add(admin)
            db.session.commit()
            print("[SUCCESS] Admin user created successfully!")

        print("  Email:   ", admin.email)
        print("  Username:", admin.username)
        print("  Role:    ", admin.role)

def main():
    from utils.validators import validate_email, validate_password

    args = [a for a in sys.argv[1:] if not a.startswith('--')]
    if len(args) != 2:
        print(__doc__.strip())
        return 1
    email, username = args
    if not validate_email(email):
        print("Invalid email address. Aborted.")
        return 1

    password = getpass.getpass("Password: ")
    ok, error = validate_password(password)
    if not ok:
        print(error, "Aborted.")
        return 1
    if password != getpass.getpass("Confirm password: "):
        print("Passwords do not match. Aborted.")
        return 1

    role = 'superadmin' if '--superadmin' in sys.argv else 'editor'
    create_admin(email, username, password, role=role)
    return 0

if __name__ == '__main__':
    sys.exit(main())
