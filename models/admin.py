"""
Admin console account
"""
from models import db
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash

ROLE_SUPERADMIN = 'superadmin'
ROLE_EDITOR = 'editor'  # inbox and contact section only

class Admin(db.Model):
    """Portfolio owner or editor allowed into /admin"""
    __tablename__ = 'admins'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(50), default=ROLE_EDITOR)
    is_active = db.Column(db.Boolean, default=True)
    last_login_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def is_superadmin(self):
        return self.role == ROLE_SUPERADMIN

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def record_login(self):
        """Stamp the login time; the caller commits"""
        self.last_login_at = datetime.utcnow()

    def __repr__(self):
        return f'<Admin {self.username} ({self.role})>'
