"""
Public routes: Home, contact form, contact form security check
"""
import time

from flask import (render_template, Blueprint, request, flash, redirect, url_for,
                   session, jsonify, make_response, current_app)
from models.contact import ContactSettings
from utils.captcha_helper import generate_challenge
from utils.captcha_render import challenge_png
from utils.message_store import MessageStore
from utils.settings_helper import get_flag
from utils.submission_gate import (SubmissionGate, ContactFormError, ChallengeMismatchError,
                                   LockoutActiveError, StoreError, SubmissionBusyError,
                                   MAX_FAILED_ATTEMPTS)

public_bp = Blueprint('public', __name__)

GATE_SESSION_KEY = 'contact_gate'
CONTACT_SUCCESS_MSG = "Message sent! I'll get back to you soon."
CONTACT_DISABLED_MSG = 'Contact form is temporarily unavailable.'
FORM_FIELDS = ('name', 'email', 'subject', 'message')
ERROR_STATUS = {LockoutActiveError: 429, SubmissionBusyError: 409, StoreError: 500}

# Swapped out in tests for a fake clock / fixed challenges
gate_clock = time.time
gate_generator = generate_challenge


def load_gate():
    """Gate for the current browser session; lock expiry is applied on load."""
    gate = SubmissionGate.from_session(
        session.get(GATE_SESSION_KEY),
        generator=gate_generator,
        clock=gate_clock,
    )
    gate.tick()
    return gate


def save_gate(gate):
    session[GATE_SESSION_KEY] = gate.to_session()


def gate_status(gate):
    """Public view of the gate. Never includes the expected answer."""
    return {
        'locked': gate.is_locked,
        'remaining_lock_seconds': gate.remaining_lock_seconds,
        'attempts_remaining': MAX_FAILED_ATTEMPTS - gate.failed_attempts,
        'version': gate.version,
        'captcha_url': url_for('public.captcha_image', v=gate.version),
    }


def _wants_json():
    return request.is_json or request.accept_mimetypes.best == 'application/json'


def _render_contact(gate, form=None):
    return render_template(
        'contact.html',
        contact=ContactSettings.current(published_only=True),
        form=form or {},
        answer=gate.answer_input,
        gate=gate_status(gate),
    )


@public_bp.route('/')
def home():
    """Landing page with the contact section"""
    gate = load_gate()
    save_gate(gate)
    return render_template(
        'home.html',
        contact=ContactSettings.current(published_only=True),
        form={},
        answer=gate.answer_input,
        gate=gate_status(gate),
    )


@public_bp.route('/contact', methods=['GET', 'POST'])
def contact():
    """Contact page: form gated by the math security check"""
    if not get_flag('contact_form_enabled'):
        if _wants_json():
            return jsonify({'success': False, 'message': CONTACT_DISABLED_MSG}), 503
        flash(CONTACT_DISABLED_MSG, 'info')
        return redirect(url_for('public.home'))

    gate = load_gate()

    if request.method == 'GET':
        save_gate(gate)
        return _render_contact(gate)

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    form = {key: str(data.get(key) or '') for key in FORM_FIELDS}
    fields = dict(form)
    fields['answer'] = str(data.get('answer') or '')
    fields['page_url'] = str(data.get('page_url') or request.referrer or request.url)
    fields['user_agent'] = request.headers.get('User-Agent')

    try:
        record = gate.submit(fields, MessageStore())
    except ContactFormError as e:
        save_gate(gate)
        if isinstance(e, (ChallengeMismatchError, LockoutActiveError)):
            current_app.logger.info("Contact form rejected: %s", e.message)
        if _wants_json():
            body = {'success': False, 'message': e.message}
            body.update(gate_status(gate))
            code = ERROR_STATUS.get(type(e), 400)
            return jsonify(body), code
        flash(e.message, 'error')
        return _render_contact(gate, form=form)

    save_gate(gate)
    if _wants_json():
        body = {'success': True, 'message': CONTACT_SUCCESS_MSG, 'id': record.id}
        body.update(gate_status(gate))
        return jsonify(body), 201
    flash(CONTACT_SUCCESS_MSG, 'success')
    return redirect(url_for('public.contact'))


@public_bp.route('/contact/captcha.png')
def captcha_image():
    """Current challenge as an image. `v` only busts the browser cache."""
    gate = load_gate()
    save_gate(gate)
    response = make_response(challenge_png(gate.challenge))
    response.headers['Content-Type'] = 'image/png'
    response.headers['Content-Disposition'] = 'inline'
    response.headers['Cache-Control'] = 'no-store, max-age=0'
    return response


@public_bp.route('/contact/captcha/refresh', methods=['POST'])
def refresh_captcha():
    """Manual new question; ignored while the form is locked"""
    gate = load_gate()
    refreshed = gate.refresh_challenge()
    save_gate(gate)
    if _wants_json():
        body = {'success': refreshed}
        body.update(gate_status(gate))
        return jsonify(body)
    return redirect(url_for('public.contact'))


@public_bp.route('/contact/captcha/status')
def captcha_status():
    """Polled once a second by the contact page while locked"""
    gate = load_gate()
    save_gate(gate)
    response = jsonify(gate_status(gate))
    response.headers['Cache-Control'] = 'no-store'
    return response


@public_bp.route('/maintenance')
def maintenance():
    """Maintenance mode page (shown when admin enables maintenance)"""
    return render_template('maintenance.html')
