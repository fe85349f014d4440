"""
Contact inbox and contact section models
"""
from models import db
from datetime import datetime

SOCIAL_KEYS = ('facebook', 'linkedin', 'github', 'x', 'instagram', 'youtube')


class ContactMessage(db.Model):
    """A message accepted from the public contact form (append-only)"""
    __tablename__ = 'contact_messages'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(200), nullable=False)
    subject = db.Column(db.String(255), nullable=True)
    message = db.Column(db.Text, nullable=False)
    page_url = db.Column(db.String(500), nullable=True)
    user_agent = db.Column(db.String(500), nullable=True)
    is_read = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f'<ContactMessage {self.id}: {self.email}>'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'subject': self.subject,
            'message': self.message,
            'page_url': self.page_url,
            'user_agent': self.user_agent,
            'is_read': self.is_read,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }


class ContactSettings(db.Model):
    """Contact section content shown next to the form. Single row."""
    __tablename__ = 'section_contact_settings'

    id = db.Column(db.Integer, primary_key=True)
    heading = db.Column(db.String(200), nullable=True)
    subheading = db.Column(db.String(500), nullable=True)
    recipient_email = db.Column(db.String(200), nullable=True)  # where new-message alerts go
    booking_url = db.Column(db.String(500), nullable=True)
    public_email = db.Column(db.String(200), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    hours_text = db.Column(db.String(200), nullable=True)
    timezone = db.Column(db.String(100), nullable=True)
    socials = db.Column(db.JSON, nullable=True)
    is_published = db.Column(db.Boolean, default=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<ContactSettings {self.id}>'

    @property
    def social_links(self):
        """Configured socials in display order, blanks dropped"""
        socials = self.socials or {}
        return [(key, socials[key]) for key in SOCIAL_KEYS if socials.get(key)]

    @classmethod
    def current(cls, published_only=False):
        query = cls.query
        if published_only:
            query = query.filter_by(is_published=True)
        return query.order_by(cls.id).first()
