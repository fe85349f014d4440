"""
Email utility functions
"""
from flask_mail import Mail, Message
from flask import current_app
from markupsafe import escape

mail = Mail()

def mail_configured():
    """True when the app has enough SMTP config to send anything"""
    return bool(
        'mail' in current_app.extensions
        and current_app.config.get('MAIL_SERVER')
        and current_app.config.get('MAIL_USERNAME')
    )

def send_email(subject, recipients, body, html=None, reply_to=None):
    """
    Send an email
    
    Args:
        subject: Email subject
        recipients: List of recipient email addresses
        body: Plain text body
        html: HTML body (optional)
        reply_to: Reply-To address (optional)
    """
    msg = Message(
        subject=subject,
        recipients=recipients,
        body=body,
        html=html,
        reply_to=reply_to
    )
    mail.send(msg)

def get_admin_emails():
    """Get list of active admin email addresses for notifications"""
    try:
        from models.admin import Admin
        admins = Admin.query.filter_by(is_active=True).all()
        return [admin.email for admin in admins]
    except Exception:
        return []

def get_contact_recipients():
    """Contact section recipient if set, otherwise every active admin"""
    from models.contact import ContactSettings
    settings = ContactSettings.current()
    if settings and settings.recipient_email:
        return [settings.recipient_email]
    return get_admin_emails()

def send_contact_message_alert(contact_message):
    """
    Email the inbox owner about a new contact message.
    Silently skipped if mail is not configured; errors are logged, not raised.
    """
    if not mail_configured():
        return False

    recipients = get_contact_recipients()
    if not recipients:
        return False

    subject = f"New contact message - {contact_message.subject or contact_message.name}"
    body = f"""
New contact form submission:

Name: {contact_message.name}
Email: {contact_message.email}
Subject: {contact_message.subject or '-'}
Page: {contact_message.page_url or '-'}

Message:
{contact_message.message}
"""
    try:
        send_email(
            subject=subject,
            recipients=recipients,
            body=body,
            html=_contact_message_html(contact_message),
            reply_to=contact_message.email,
        )
        return True
    except Exception as e:
        current_app.logger.error(f"Error sending contact message alert: {str(e)}", exc_info=True)
        return False

def _contact_message_html(contact_message) -> str:
    """HTML template for new contact message alert"""
    rows = [
        ('Name', contact_message.name),
        ('Email', contact_message.email),
        ('Subject', contact_message.subject or '-'),
        ('Page', contact_message.page_url or '-'),
    ]
    cells = "".join(
        f'<tr><td style="padding: 8px; border-bottom: 1px solid #eee;"><strong>{label}:</strong></td>'
        f'<td style="padding: 8px; border-bottom: 1px solid #eee;">{escape(value)}</td></tr>'
        for label, value in rows
    )
    return f"""
    <!DOCTYPE html>
    <html>
    <head><meta charset="utf-8"><title>New Contact Message</title></head>
    <body style="font-family: system-ui, sans-serif; max-width: 600px; margin: 0 auto; padding: 24px;">
        <h2 style="color: #1a1a2e;">New Contact Message</h2>
        <table style="width: 100%; border-collapse: collapse; margin: 20px 0;">{cells}</table>
        <p style="white-space: pre-wrap;">{escape(contact_message.message)}</p>
    </body>
    </html>
    """
