"""
Admin contact routes: contact section settings and message inbox
"""
from flask import render_template, request, Blueprint, flash, redirect, url_for, jsonify, current_app
from routes.admin.auth import admin_required
from models import db
from models.contact import ContactSettings, SOCIAL_KEYS
from utils.message_store import MessageStore
from utils.submission_gate import StoreError
from utils.validators import validate_email, validate_url

admin_contact_bp = Blueprint('admin_contact', __name__, url_prefix='/admin/contact')

TEST_MESSAGE_PAGE_URL = '/admin/contact/inbox (test)'
TEXT_FIELDS = ('heading', 'subheading', 'recipient_email', 'booking_url',
               'public_email', 'phone', 'hours_text', 'timezone')


def _blank_to_none(value):
    value = (value or '').strip()
    return value or None


def normalize_settings_form(form):
    """
    Turn the settings form into column values.
    Returns (values, errors); blank strings become None.
    """
    values = {key: _blank_to_none(form.get(key)) for key in TEXT_FIELDS}
    values['socials'] = {key: (form.get(f'social_{key}') or '').strip() for key in SOCIAL_KEYS}
    values['is_published'] = form.get('is_published') == 'on'

    errors = []
    for key in ('recipient_email', 'public_email'):
        if values[key] and not validate_email(values[key]):
            errors.append(f"{key.replace('_', ' ').capitalize()} is not a valid email address.")
    urls = [('Booking URL', values['booking_url'])]
    urls += [(key.capitalize(), url) for key, url in values['socials'].items()]
    for label, url in urls:
        if not validate_url(url):
            errors.append(f'{label} must start with http:// or https://')
    return values, errors


@admin_contact_bp.route('/', methods=['GET', 'POST'])
@admin_required
def settings():
    """Edit headings, emails, socials and publish status of the contact section"""
    contact = ContactSettings.current()
    if contact is None:
        contact = ContactSettings(is_published=False, socials={})
        db.session.add(contact)
        db.session.commit()

    if request.method == 'POST':
        values, errors = normalize_settings_form(request.form)
        if errors:
            for error in errors:
                flash(error, 'error')
            return render_template('admin/contact_settings.html', contact=values, social_keys=SOCIAL_KEYS), 400

        for key, value in values.items():
            setattr(contact, key, value)
        try:
            db.session.commit()
            flash('Contact settings were updated.', 'success')
            return redirect(url_for('admin_contact.settings'))
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Error saving contact settings: {str(e)}", exc_info=True)
            flash(f'Save failed: {e}', 'error')

    return render_template('admin/contact_settings.html', contact=contact, social_keys=SOCIAL_KEYS)


@admin_contact_bp.route('/publish', methods=['POST'])
@admin_required
def toggle_publish():
    """Flip the contact section's published flag"""
    contact = ContactSettings.current()
    if contact is None:
        flash('Save the contact settings first.', 'error')
        return redirect(url_for('admin_contact.settings'))
    contact.is_published = not contact.is_published
    try:
        db.session.commit()
        flash('Contact section published.' if contact.is_published else 'Contact section hidden.', 'success')
    except Exception as e:
        db.session.rollback()
        flash(f'Update failed: {e}', 'error')
    return redirect(url_for('admin_contact.settings'))


@admin_contact_bp.route('/inbox')
@admin_required
def inbox():
    """Latest messages, newest first"""
    store = MessageStore()
    messages = store.recent()
    if request.accept_mimetypes.best == 'application/json':
        return jsonify({'success': True, 'messages': [m.to_dict() for m in messages]})
    return render_template('admin/inbox.html', messages=messages, unread_count=store.unread_count())


@admin_contact_bp.route('/inbox/test', methods=['POST'])
@admin_required
def send_test_message():
    """Add a test message to the inbox without going through the public form"""
    fields = {key: (request.form.get(key) or '').strip() for key in ('name', 'email', 'subject', 'message')}
    for key in ('name', 'email', 'message'):
        if not fields[key]:
            flash(f'{key.capitalize()} is required.', 'error')
            return redirect(url_for('admin_contact.inbox'))

    payload = dict(fields)
    payload['subject'] = fields['subject'] or None
    payload['page_url'] = TEST_MESSAGE_PAGE_URL
    payload['user_agent'] = request.headers.get('User-Agent')
    try:
        MessageStore(notify=False).submit_message(payload)
        flash('Test message sent.', 'success')
    except StoreError as e:
        flash(e.message, 'error')
    return redirect(url_for('admin_contact.inbox'))


@admin_contact_bp.route('/inbox/<int:message_id>/read', methods=['POST'])
@admin_required
def mark_message_read(message_id):
    try:
        record = MessageStore().mark_read(message_id)
    except StoreError as e:
        return jsonify({'success': False, 'message': e.message}), 500
    if not record:
        return jsonify({'success': False, 'message': 'Message not found'}), 404
    return jsonify({'success': True, 'message': 'Message marked as read'})


@admin_contact_bp.route('/inbox/<int:message_id>/delete', methods=['POST'])
@admin_required
def delete_message(message_id):
    """Permanently remove a message"""
    try:
        deleted = MessageStore().delete(message_id)
    except StoreError as e:
        flash(f'Delete failed: {e.message}', 'error')
        return redirect(url_for('admin_contact.inbox'))
    if deleted:
        flash('Message deleted.', 'success')
    else:
        flash('Message not found.', 'error')
    return redirect(url_for('admin_contact.inbox'))
