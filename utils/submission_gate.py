"""
Contact form abuse gate: math CAPTCHA attempts with a timed lockout.

The gate owns the live challenge, the failed-attempt counter and the lockout
deadline. It is stored per browser session and never persisted elsewhere, so
clearing the session resets it.
"""
import logging
import math
import re
import time

from utils.captcha_helper import Challenge, generate_challenge

logger = logging.getLogger(__name__)

ANSWER_PATTERN = re.compile(r"-?[0-9]+")

MAX_FAILED_ATTEMPTS = 3
LOCKOUT_SECONDS = 60

REQUIRED_FIELDS = (
    ('name', 'Name is required.'),
    ('email', 'Email is required.'),
    ('message', 'Message is required.'),
)
ANSWER_REQUIRED_MSG = "Please answer the security question."
ANSWER_NOT_NUMBER_MSG = "The answer must be a number."
INCORRECT_ANSWER_MSG = "Incorrect answer. Please try the new question."
BUSY_MSG = "Your message is already being sent."


class ContactFormError(Exception):
    """Base class for every error surfaced by the contact form."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(ContactFormError):
    """A required field is blank or the answer is not a number."""


class ChallengeMismatchError(ContactFormError):
    """The answer was wrong. `locked` is set on the attempt that triggers the lockout."""

    def __init__(self, message, locked=False, remaining_seconds=0):
        super().__init__(message)
        self.locked = locked
        self.remaining_seconds = remaining_seconds


class LockoutActiveError(ContactFormError):
    def __init__(self, remaining_seconds):
        super().__init__(f"Too many incorrect answers. Try again in {remaining_seconds}s.")
        self.remaining_seconds = remaining_seconds


class SubmissionBusyError(ContactFormError):
    def __init__(self):
        super().__init__(BUSY_MSG)


class StoreError(ContactFormError):
    """The message store rejected the write. Not a failed attempt."""


def lockout_message(remaining_seconds):
    return f"Too many incorrect answers. The form is locked for {remaining_seconds}s."


class SubmissionGate:
    """
    State machine with two states:
      Unlocked(failed_attempts)  failed_attempts in [0, MAX_FAILED_ATTEMPTS)
      Locked(lock_until)

    Every challenge replacement also clears `answer_input` and bumps
    `version` so the rendered image can be refreshed.
    """

    def __init__(self, generator=generate_challenge, clock=time.time, challenge=None):
        self._generate = generator
        self._clock = clock
        self.challenge = challenge or generator()
        self.failed_attempts = 0
        self.lock_until = None
        self.answer_input = ''
        self.busy = False
        self.version = 1

    # ---------- exposed state ----------

    @property
    def is_locked(self):
        return self.lock_until is not None

    @property
    def remaining_lock_seconds(self):
        if self.lock_until is None:
            return 0
        return max(0, math.ceil(self.lock_until - self._clock()))

    # ---------- transitions ----------

    def _replace_challenge(self):
        self.challenge = self._generate()
        self.answer_input = ''
        self.version += 1

    def tick(self):
        """Lock expiry check. Called once a second while the page is locked."""
        if self.lock_until is not None and self._clock() >= self.lock_until:
            self.lock_until = None
            self.failed_attempts = 0
            self._replace_challenge()
            logger.info("Contact form lockout expired")
            return True
        return False

    def refresh_challenge(self):
        """User-requested new question. Disabled while locked."""
        if self.is_locked:
            return False
        self._replace_challenge()
        return True

    def _record_failure(self):
        self.failed_attempts += 1
        if self.failed_attempts >= MAX_FAILED_ATTEMPTS:
            self.failed_attempts = 0
            self.lock_until = self._clock() + LOCKOUT_SECONDS
            self._replace_challenge()
            logger.warning("Contact form locked for %ss after %s incorrect answers",
                           LOCKOUT_SECONDS, MAX_FAILED_ATTEMPTS)
            raise ChallengeMismatchError(
                lockout_message(LOCKOUT_SECONDS),
                locked=True,
                remaining_seconds=LOCKOUT_SECONDS,
            )
        self._replace_challenge()
        raise ChallengeMismatchError(INCORRECT_ANSWER_MSG)

    def submit(self, fields, store):
        """
        Run the full decision sequence for one form submission.

        `fields` holds name, email, subject, message, answer and optionally
        page_url / user_agent. Returns the stored record on success and raises
        a ContactFormError subclass otherwise.
        """
        self.tick()
        if self.is_locked:
            raise LockoutActiveError(self.remaining_lock_seconds)
        if self.busy:
            raise SubmissionBusyError()

        self.answer_input = (fields.get('answer') or '').strip()

        cleaned = {}
        for key, error in REQUIRED_FIELDS:
            value = (fields.get(key) or '').strip()
            if not value:
                raise ValidationError(error)
            cleaned[key] = value

        if not self.answer_input:
            raise ValidationError(ANSWER_REQUIRED_MSG)
        if not ANSWER_PATTERN.fullmatch(self.answer_input):
            raise ValidationError(ANSWER_NOT_NUMBER_MSG)
        answer = int(self.answer_input)

        if answer != self.challenge.expected_answer:
            self._record_failure()

        payload = {
            'name': cleaned['name'],
            'email': cleaned['email'],
            'subject': (fields.get('subject') or '').strip() or None,
            'message': cleaned['message'],
            'page_url': fields.get('page_url'),
            'user_agent': fields.get('user_agent'),
        }

        self.busy = True
        try:
            record = store.submit_message(payload)
        finally:
            self.busy = False

        self.failed_attempts = 0
        self._replace_challenge()
        return record

    # ---------- session storage ----------

    def to_session(self):
        return {
            'challenge': self.challenge.to_dict(),
            'failed_attempts': self.failed_attempts,
            'lock_until': self.lock_until,
            'answer_input': self.answer_input,
            'version': self.version,
        }

    @classmethod
    def from_session(cls, data, generator=generate_challenge, clock=time.time):
        """Rebuild a gate from session data; malformed or missing data yields a fresh gate."""
        if not data:
            return cls(generator=generator, clock=clock)
        try:
            challenge = Challenge.from_dict(data['challenge'])
            failed_attempts = int(data.get('failed_attempts') or 0)
            lock_until = data.get('lock_until')
            lock_until = float(lock_until) if lock_until is not None else None
            version = int(data.get('version') or 1)
        except (KeyError, TypeError, ValueError):
            logger.info("Discarding malformed contact gate session data")
            return cls(generator=generator, clock=clock)

        gate = cls(generator=generator, clock=clock, challenge=challenge)
        gate.failed_attempts = min(failed_attempts, MAX_FAILED_ATTEMPTS - 1)
        gate.lock_until = lock_until
        gate.answer_input = data.get('answer_input') or ''
        gate.version = version
        return gate
