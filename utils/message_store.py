"""
Database-backed contact message store.
Accepts payloads approved by the contact form gate and backs the admin inbox.
"""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.contact import ContactMessage
from utils.submission_gate import StoreError

STORE_FAIL_MSG = "Failed to send message. Please try again."
INBOX_PAGE_SIZE = 25

_LIMITS = {
    'name': 200,
    'email': 200,
    'subject': 255,
    'page_url': 500,
    'user_agent': 500,
}


def _clip(payload):
    clipped = dict(payload)
    for key, limit in _LIMITS.items():
        value = clipped.get(key)
        if isinstance(value, str) and len(value) > limit:
            clipped[key] = value[:limit]
    return clipped


class MessageStore:
    """Append-only sink for contact messages plus the inbox queries."""

    def __init__(self, notify=True):
        self.notify = notify

    def submit_message(self, payload):
        """
        Insert one message and return the stored row.
        Raises StoreError with the database message if the write fails.
        """
        data = _clip(payload)
        record = ContactMessage(
            name=data['name'],
            email=data['email'],
            subject=data.get('subject') or None,
            message=data['message'],
            page_url=data.get('page_url'),
            user_agent=data.get('user_agent'),
        )
        try:
            db.session.add(record)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Failed to store contact message: {str(e)}", exc_info=True)
            detail = str(getattr(e, 'orig', None) or '') or STORE_FAIL_MSG
            raise StoreError(detail)

        current_app.logger.info("Contact message %s stored from %s", record.id, record.email)
        if self.notify:
            self._notify(record)
        return record

    def _notify(self, record):
        # The message is already committed; a failed alert must not fail the submit
        from utils.notifications import notify_new_contact_message
        from utils.mail import send_contact_message_alert
        record_id = record.id
        try:
            notify_new_contact_message(record)
            send_contact_message_alert(record)
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Error alerting about contact message {record_id}: {str(e)}",
                                     exc_info=True)

    def recent(self, limit=INBOX_PAGE_SIZE):
        return ContactMessage.query.order_by(
            ContactMessage.created_at.desc(), ContactMessage.id.desc()
        ).limit(limit).all()

    def mark_read(self, message_id):
        record = db.session.get(ContactMessage, message_id)
        if not record:
            return None
        record.is_read = True
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StoreError(str(e))
        return record

    def delete(self, message_id):
        record = db.session.get(ContactMessage, message_id)
        if not record:
            return False
        try:
            db.session.delete(record)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StoreError(str(e))
        return True

    def unread_count(self):
        return ContactMessage.query.filter_by(is_read=False).count()
