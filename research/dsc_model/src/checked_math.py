"""Checked uint256 arithmetic"""
from .constants import MAX_UINT256
from .errors import CheckedArithmeticError


def checked_add(a: int, b: int) -> int:
    """Add with overflow checking"""
    result = a + b
    if result > MAX_UINT256:
        raise CheckedArithmeticError("Arithmetic overflow in addition")
    return result

def checked_sub(a: int, b: int) -> int:
    """Subtract with underflow checking"""
    if b > a:
        raise CheckedArithmeticError(f"Arithmetic underflow: {a} - {b}")
    return a - b

def checked_mul(a: int, b: int) -> int:
    """Multiply with overflow checking"""
    result = a * b
    if result > MAX_UINT256:
        raise CheckedArithmeticError("Arithmetic overflow in multiplication")
    return result

def checked_div(a: int, b: int) -> int:
    """Divide with zero checking"""
    if b == 0:
        raise CheckedArithmeticError("Division by zero")
    return a // b
