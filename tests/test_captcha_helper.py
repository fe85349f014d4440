"""
Tests for math challenge generation
"""
import random

import pytest

from utils.captcha_helper import Challenge, evaluate, generate_challenge


class FixedRandom:
    def __init__(self, ints, choice):
        self.ints = list(ints)
        self.picked = choice

    def randint(self, low, high):
        return self.ints.pop(0)

    def choice(self, options):
        assert self.picked in options
        return self.picked


class TestGenerateChallenge:

    def test_answers_are_exact_and_operands_in_range(self):
        rng = random.Random(1234)
        for _ in range(500):
            challenge = generate_challenge(rng)
            assert 1 <= challenge.left_operand <= 9
            assert 1 <= challenge.right_operand <= 9
            assert challenge.operator in ('add', 'multiply')
            assert challenge.expected_answer == evaluate(
                challenge.left_operand, challenge.operator, challenge.right_operand
            )

    def test_both_operators_and_all_digits_show_up(self):
        rng = random.Random(99)
        challenges = [generate_challenge(rng) for _ in range(400)]
        assert {c.operator for c in challenges} == {'add', 'multiply'}
        assert {c.left_operand for c in challenges} == set(range(1, 10))

    def test_addition_example(self):
        challenge = generate_challenge(FixedRandom([4, 6], 'add'))
        assert challenge == Challenge(4, 6, 'add', 10)
        assert challenge.prompt == '4 + 6 = ?'

    def test_multiplication_example(self):
        challenge = generate_challenge(FixedRandom([3, 7], 'multiply'))
        assert challenge.expected_answer == 21
        assert challenge.prompt == '3 x 7 = ?'


class TestChallengeSerialization:

    def test_from_dict_restores_challenge(self):
        challenge = Challenge(2, 9, 'multiply', 18)
        assert Challenge.from_dict(challenge.to_dict()) == challenge

    def test_unknown_operator_is_rejected(self):
        with pytest.raises(ValueError):
            Challenge.from_dict({'left_operand': 1, 'right_operand': 2,
                                 'operator': 'subtract', 'expected_answer': -1})

    def test_challenge_is_immutable(self):
        challenge = Challenge(1, 1, 'add', 2)
        with pytest.raises(Exception):
            challenge.expected_answer = 3
