"""
Admin bell notifications
"""
from models import db
from datetime import datetime

TYPE_CONTACT = 'contact'  # related_id is the contact message
TYPE_SYSTEM = 'system'    # related_id is the admin involved, if any

# Admin page a notification opens when clicked
TARGET_ENDPOINTS = {
    TYPE_CONTACT: 'admin_contact.inbox',
}
DEFAULT_TARGET_ENDPOINT = 'admin_dashboard.dashboard'

class AdminNotification(db.Model):
    __tablename__ = 'admin_notifications'

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(50), nullable=False, default=TYPE_SYSTEM)
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    related_id = db.Column(db.Integer, nullable=True)
    is_read = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def target_endpoint(self):
        return TARGET_ENDPOINTS.get(self.type, DEFAULT_TARGET_ENDPOINT)

    @classmethod
    def unread_count(cls):
        return cls.query.filter_by(is_read=False).count()

    def __repr__(self):
        return f'<AdminNotification {self.id}: {self.type}>'

    def to_dict(self):
        return {
            'id': self.id,
            'type': self.type,
            'title': self.title,
            'message': self.message,
            'related_id': self.related_id,
            'is_read': self.is_read,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
