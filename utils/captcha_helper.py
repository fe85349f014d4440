"""
Custom math CAPTCHA generation for the public contact form.
Operands are single digits; the operator is addition or multiplication.
"""
import random
from dataclasses import dataclass

OPERAND_MIN = 1
OPERAND_MAX = 9
OPERATORS = ('add', 'multiply')
OPERATOR_GLYPHS = {'add': '+', 'multiply': 'x'}


@dataclass(frozen=True)
class Challenge:
    """One arithmetic challenge. Replaced wholesale, never mutated."""
    left_operand: int
    right_operand: int
    operator: str
    expected_answer: int

    @property
    def prompt(self) -> str:
        glyph = OPERATOR_GLYPHS[self.operator]
        return f"{self.left_operand} {glyph} {self.right_operand} = ?"

    def to_dict(self) -> dict:
        return {
            'left_operand': self.left_operand,
            'right_operand': self.right_operand,
            'operator': self.operator,
            'expected_answer': self.expected_answer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Challenge':
        if data['operator'] not in OPERATORS:
            raise ValueError(f"Unknown operator: {data['operator']}")
        return cls(
            left_operand=int(data['left_operand']),
            right_operand=int(data['right_operand']),
            operator=data['operator'],
            expected_answer=int(data['expected_answer']),
        )


def evaluate(left: int, operator: str, right: int) -> int:
    """Exact integer result of `left <operator> right`."""
    if operator == 'add':
        return left + right
    if operator == 'multiply':
        return left * right
    raise ValueError(f"Unknown operator: {operator}")


def generate_challenge(rng=None) -> Challenge:
    """
    Create a fresh math challenge.
    `rng` only needs randint() and choice(); defaults to the random module.
    """
    rng = rng or random
    left = rng.randint(OPERAND_MIN, OPERAND_MAX)
    right = rng.randint(OPERAND_MIN, OPERAND_MAX)
    operator = rng.choice(OPERATORS)
    return Challenge(left, right, operator, evaluate(left, operator, right))
