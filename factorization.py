import re
import sys
from typing import List

from errors import (
    DuplicatePrimeFactorError,
    FactorizationParseError,
    MalformedFactorizationTokenError,
)
from math_context import Factorization
from primality import Primality

_DIGITS = re.compile(r"[0-9]+")
_MAX_EXPONENT_DIGITS = len(str(sys.maxsize))


def parse_factorization(text: str, oracle) -> Factorization:
    """
    Разбирает разложение вида "q1^e1,q2^e2,..."
    Каждое q должно быть простым (по ответу оракула) и встречаться не больше одного раза.
    Ошибки собираются по всем токенам и возвращаются вместе в FactorizationParseError
    """
    errors: List[Exception] = []
    parsed = {}

    for token in text.strip().split(","):
        token = token.strip()
        parts = token.split("^")
        if len(parts) != 2:
            errors.append(MalformedFactorizationTokenError(
                token, "expected exactly one '^' between prime and exponent"))
            continue

        q_str, e_str = parts[0].strip(), parts[1].strip()
        if not _DIGITS.fullmatch(q_str):
            errors.append(MalformedFactorizationTokenError(token, f"invalid prime {q_str!r}"))
            continue
        if (not _DIGITS.fullmatch(e_str) or len(e_str) > _MAX_EXPONENT_DIGITS
                or int(e_str) > sys.maxsize):
            errors.append(MalformedFactorizationTokenError(token, f"invalid exponent {e_str!r}"))
            continue

        try:
            q = int(q_str)
        except ValueError as err:
            # слишком длинная строка при ограничении sys.set_int_max_str_digits
            errors.append(MalformedFactorizationTokenError(token, f"invalid prime: {err}"))
            continue

        e = int(e_str)
        if oracle.is_prime(q) != Primality.YES:
            errors.append(MalformedFactorizationTokenError(token, f"{q} is not a prime"))
            continue
        if q in parsed:
            errors.append(DuplicatePrimeFactorError(token, q))
            continue

        parsed[q] = e

    if errors:
        raise FactorizationParseError(errors)

    return {q: parsed[q] for q in sorted(parsed)}


def format_factorization(factors: Factorization) -> str:
    return ",".join(f"{q}^{e}" for q, e in sorted(factors.items()))


def format_product(n: int, factors: Factorization) -> str:
    if not factors:
        return f"{n} = 1"
    return f"{n} = " + " · ".join(f"{q}^{e}" for q, e in sorted(factors.items()))
