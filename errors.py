from typing import List


class NumberTheoryError(Exception):
    ...


class NotPrimeError(NumberTheoryError, ValueError):
    def __init__(self, n: int):
        super().__init__(f"{n} is not a prime")
        self.n = n


class OracleFailure(NumberTheoryError, RuntimeError):
    ...


class MalformedFactorizationTokenError(NumberTheoryError, ValueError):
    def __init__(self, token: str, reason: str):
        super().__init__(f"{token!r}: {reason}")
        self.token = token
        self.reason = reason


class DuplicatePrimeFactorError(NumberTheoryError, ValueError):
    def __init__(self, token: str, prime: int):
        super().__init__(f"{token!r}: prime factor {prime} appears more than once")
        self.token = token
        self.prime = prime


class FactorizationParseError(NumberTheoryError, ValueError):
    """
    Собирает ошибки по всем токенам разложения, а не только первую
    """
    def __init__(self, errors: List[Exception]):
        details = "; ".join(str(e) for e in errors)
        super().__init__(f"Error parsing factorization: {details}")
        self.errors = errors


class GeneratorSearchExhausted(NumberTheoryError, RuntimeError):
    def __init__(self, prime: int, attempts: int):
        super().__init__(
            f"no element of order divisible by {prime} found after {attempts} attempts"
        )
        self.prime = prime
        self.attempts = attempts
