"""
Tests for the contact form gate state machine
"""
import pytest

from tests.conftest import ChallengeSequence, FakeClock, add, multiply
from utils.submission_gate import (LOCKOUT_SECONDS, MAX_FAILED_ATTEMPTS, ChallengeMismatchError,
                                   LockoutActiveError, StoreError, SubmissionBusyError,
                                   SubmissionGate, ValidationError)


class FakeStore:
    def __init__(self, error=None):
        self.payloads = []
        self.error = error

    def submit_message(self, payload):
        if self.error:
            raise StoreError(self.error)
        self.payloads.append(payload)
        return {'id': len(self.payloads), **payload}


def fields(answer, **overrides):
    data = {
        'name': 'Ada Lovelace',
        'email': 'ada@example.com',
        'subject': '',
        'message': 'I would like to hire you.',
        'answer': answer,
    }
    data.update(overrides)
    return data


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sequence():
    return ChallengeSequence(add(4, 6))


@pytest.fixture
def gate(sequence, clock):
    return SubmissionGate(generator=sequence, clock=clock)


@pytest.fixture
def store():
    return FakeStore()


def fail_times(gate, store, times):
    for _ in range(times):
        with pytest.raises(ChallengeMismatchError):
            gate.submit(fields('0'), store)


class TestInitialState:

    def test_starts_unlocked_with_a_challenge(self, gate, sequence):
        assert gate.challenge == add(4, 6)
        assert gate.failed_attempts == 0
        assert not gate.is_locked
        assert gate.remaining_lock_seconds == 0
        assert sequence.calls == 1


class TestCorrectAnswer:

    def test_accepts_and_dispatches_exactly_once(self, gate, store):
        record = gate.submit(fields('10'), store)
        assert record['id'] == 1
        assert len(store.payloads) == 1
        assert gate.failed_attempts == 0
        assert not gate.is_locked

    def test_replaces_challenge_and_clears_answer(self, gate, store, sequence):
        sequence.push(multiply(2, 3))
        version = gate.version
        gate.submit(fields(' 10 '), store)
        assert gate.challenge == multiply(2, 3)
        assert gate.answer_input == ''
        assert gate.version == version + 1

    def test_payload_is_trimmed_and_blank_subject_is_none(self, gate, store):
        gate.submit(fields('10', name='  Ada ', message=' Hi there ', page_url='/#contact',
                           user_agent='pytest'), store)
        payload = store.payloads[0]
        assert payload['name'] == 'Ada'
        assert payload['message'] == 'Hi there'
        assert payload['subject'] is None
        assert payload['page_url'] == '/#contact'
        assert payload['user_agent'] == 'pytest'

    def test_success_resets_earlier_failures(self, gate, store, sequence):
        sequence.push(add(1, 1), add(2, 2))
        fail_times(gate, store, 1)
        assert gate.failed_attempts == 1
        gate.submit(fields('2'), store)
        assert gate.failed_attempts == 0


class TestIncorrectAnswer:

    def test_first_failure_counts_and_replaces_challenge(self, gate, store, sequence):
        sequence.push(add(5, 5))
        with pytest.raises(ChallengeMismatchError) as exc:
            gate.submit(fields('11'), store)
        assert not exc.value.locked
        assert gate.failed_attempts == 1
        assert gate.challenge == add(5, 5)
        assert gate.answer_input == ''
        assert store.payloads == []

    def test_third_failure_locks_for_sixty_seconds(self, gate, store, clock):
        fail_times(gate, store, MAX_FAILED_ATTEMPTS - 1)
        assert gate.failed_attempts == 2
        with pytest.raises(ChallengeMismatchError) as exc:
            gate.submit(fields('0'), store)
        assert exc.value.locked
        assert exc.value.remaining_seconds == LOCKOUT_SECONDS
        assert gate.is_locked
        assert gate.failed_attempts == 0
        assert gate.lock_until == clock.now + LOCKOUT_SECONDS
        assert gate.remaining_lock_seconds == 60

    def test_counter_never_observed_at_three(self, gate, store):
        seen = []
        for _ in range(MAX_FAILED_ATTEMPTS):
            with pytest.raises(ChallengeMismatchError):
                gate.submit(fields('0'), store)
            seen.append(gate.failed_attempts)
        assert seen == [1, 2, 0]


class TestLockout:

    def test_submission_while_locked_skips_every_other_check(self, gate, store, sequence, clock):
        fail_times(gate, store, MAX_FAILED_ATTEMPTS)
        calls = sequence.calls
        challenge = gate.challenge
        clock.advance(10)
        with pytest.raises(LockoutActiveError) as exc:
            gate.submit(fields('', name='', email='', message=''), store)
        assert exc.value.remaining_seconds == 50
        assert gate.challenge == challenge
        assert sequence.calls == calls
        assert gate.is_locked

    def test_refresh_is_disabled_while_locked(self, gate, store, sequence):
        fail_times(gate, store, MAX_FAILED_ATTEMPTS)
        calls = sequence.calls
        assert gate.refresh_challenge() is False
        assert sequence.calls == calls

    def test_tick_before_deadline_does_nothing(self, gate, store, clock):
        fail_times(gate, store, MAX_FAILED_ATTEMPTS)
        clock.advance(59.5)
        assert gate.tick() is False
        assert gate.is_locked
        assert gate.remaining_lock_seconds == 1

    def test_tick_at_deadline_unlocks_with_fresh_challenge(self, gate, store, clock, sequence):
        fail_times(gate, store, MAX_FAILED_ATTEMPTS)
        sequence.push(add(9, 9))
        gate.answer_input = 'stale'
        clock.advance(LOCKOUT_SECONDS)
        assert gate.tick() is True
        assert not gate.is_locked
        assert gate.failed_attempts == 0
        assert gate.challenge == add(9, 9)
        assert gate.answer_input == ''

    def test_scenario_multiply_three_wrong_then_unlock(self, clock, store):
        sequence = ChallengeSequence(multiply(3, 7), multiply(3, 7), multiply(3, 7), multiply(3, 7))
        gate = SubmissionGate(generator=sequence, clock=clock)
        locked_at = clock.now

        for attempt in range(3):
            with pytest.raises(ChallengeMismatchError) as exc:
                gate.submit(fields('10'), store)
        assert exc.value.locked

        clock.now = locked_at + 59
        with pytest.raises(LockoutActiveError) as exc:
            gate.submit(fields('21'), store)
        assert exc.value.remaining_seconds == 1
        assert gate.remaining_lock_seconds == 1

        sequence.push(add(1, 2))
        clock.now = locked_at + 60
        gate.tick()
        assert not gate.is_locked
        gate.submit(fields('3'), store)
        assert len(store.payloads) == 1

    def test_submit_after_deadline_applies_pending_expiry(self, gate, store, clock, sequence):
        fail_times(gate, store, MAX_FAILED_ATTEMPTS)
        sequence.push(add(2, 2))
        clock.advance(LOCKOUT_SECONDS + 5)
        gate.submit(fields('4'), store)
        assert len(store.payloads) == 1


class TestValidation:

    @pytest.mark.parametrize('blank', ['name', 'email', 'message'])
    def test_blank_required_field_changes_nothing(self, gate, store, sequence, blank):
        calls = sequence.calls
        challenge = gate.challenge
        for answer in ('10', '0'):
            with pytest.raises(ValidationError):
                gate.submit(fields(answer, **{blank: '   '}), store)
        assert gate.failed_attempts == 0
        assert gate.challenge == challenge
        assert sequence.calls == calls
        assert store.payloads == []

    def test_non_numeric_answer_is_a_validation_error(self, gate, store):
        with pytest.raises(ValidationError):
            gate.submit(fields('ten'), store)
        assert gate.failed_attempts == 0
        assert gate.answer_input == 'ten'

    @pytest.mark.parametrize('answer', ['1_0', '+10', '１０', '10.0', ' 1 0 '])
    def test_only_plain_ascii_integers_are_answers(self, gate, store, answer):
        with pytest.raises(ValidationError) as exc:
            gate.submit(fields(answer), store)
        assert exc.value.message == 'The answer must be a number.'
        assert gate.failed_attempts == 0
        assert store.payloads == []

    def test_negative_answer_is_a_wrong_attempt(self, gate, store):
        with pytest.raises(ChallengeMismatchError):
            gate.submit(fields('-10'), store)
        assert gate.failed_attempts == 1

    def test_blank_answer_is_not_an_attempt(self, gate, store):
        with pytest.raises(ValidationError):
            gate.submit(fields(''), store)
        assert gate.failed_attempts == 0


class TestStoreFailure:

    def test_store_error_keeps_state_and_typed_answer(self, gate, sequence):
        failing = FakeStore(error='relation "contact_messages" does not exist')
        calls = sequence.calls
        with pytest.raises(StoreError) as exc:
            gate.submit(fields('10'), failing)
        assert exc.value.message == 'relation "contact_messages" does not exist'
        assert gate.failed_attempts == 0
        assert gate.challenge == add(4, 6)
        assert gate.answer_input == '10'
        assert sequence.calls == calls
        assert gate.busy is False

    def test_store_error_after_a_failure_keeps_the_counter(self, gate, store, sequence):
        sequence.push(add(1, 1))
        fail_times(gate, store, 1)
        with pytest.raises(StoreError):
            gate.submit(fields('2'), FakeStore(error='down'))
        assert gate.failed_attempts == 1

    def test_retry_after_store_error_succeeds(self, gate, store):
        with pytest.raises(StoreError):
            gate.submit(fields('10'), FakeStore(error='timeout'))
        gate.submit(fields('10'), store)
        assert len(store.payloads) == 1

    def test_second_submit_while_writing_is_rejected(self, gate):
        class ReentrantStore:
            def submit_message(self, payload):
                with pytest.raises(SubmissionBusyError):
                    gate.submit(fields('10'), self)
                return payload

        gate.submit(fields('10'), ReentrantStore())
        assert gate.busy is False


class TestRefresh:

    def test_refresh_keeps_counter(self, gate, store, sequence):
        sequence.push(add(1, 1), add(3, 3))
        fail_times(gate, store, 1)
        gate.answer_input = '5'
        assert gate.refresh_challenge() is True
        assert gate.challenge == add(3, 3)
        assert gate.failed_attempts == 1
        assert gate.answer_input == ''


class TestSessionStorage:

    def test_round_trip_preserves_lock(self, gate, store, clock, sequence):
        fail_times(gate, store, MAX_FAILED_ATTEMPTS)
        data = gate.to_session()
        restored = SubmissionGate.from_session(data, generator=sequence, clock=clock)
        assert restored.is_locked
        assert restored.challenge == gate.challenge
        assert restored.version == gate.version

    def test_restoring_does_not_mint_a_challenge(self, gate, sequence, clock):
        data = gate.to_session()
        calls = sequence.calls
        SubmissionGate.from_session(data, generator=sequence, clock=clock)
        assert sequence.calls == calls

    @pytest.mark.parametrize('data', [None, {}, {'challenge': {'operator': 'add'}}, {'challenge': 'x'}])
    def test_missing_or_malformed_data_gives_fresh_gate(self, data, clock):
        gate = SubmissionGate.from_session(data, generator=ChallengeSequence(add(1, 1)), clock=clock)
        assert gate.challenge == add(1, 1)
        assert gate.failed_attempts == 0
        assert not gate.is_locked
