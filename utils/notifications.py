"""
Admin notification utility functions
"""
from models import db
from models.admin_notification import AdminNotification, TYPE_CONTACT, TYPE_SYSTEM
from flask import current_app

def create_notification(notification_type, title, message, related_id=None):
    """
    Create a new admin notification
    
    Args:
        notification_type: 'contact' or 'system'
        title: Notification title
        message: Notification message
        related_id: Optional ID of related entity (contact_message_id)
    
    Returns:
        AdminNotification object or None if creation failed
    """
    try:
        notification = AdminNotification(
            type=notification_type,
            title=title,
            message=message,
            related_id=related_id,
            is_read=False
        )
        db.session.add(notification)
        db.session.commit()
        return notification
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to create notification: {str(e)}", exc_info=True)
        return None

def notify_new_contact_message(contact_message):
    """Create notification for a message accepted from the contact form"""
    title = "New Contact Message"
    subject = f" about \"{contact_message.subject}\"" if contact_message.subject else ""
    message = f"{contact_message.name} ({contact_message.email}) sent a message{subject}"
    return create_notification(TYPE_CONTACT, title, message, related_id=contact_message.id)

def notify_unauthorized_access(admin_id, attempted_action):
    """Create notification for unauthorized access attempt"""
    title = "Unauthorized Access Attempt"
    message = f"Admin #{admin_id} attempted unauthorized action: {attempted_action}"
    return create_notification(TYPE_SYSTEM, title, message, related_id=admin_id)
