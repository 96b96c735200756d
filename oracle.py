import logging

from sympy import factorint

from errors import OracleFailure
from math_context import Factorization, MathService
from primality import IPrimalityTest, MillerRabinTest, Primality

logger = logging.getLogger(__name__)


class FactorizationOracle:
    """
    Проверка простоты и полное разложение на простые множители.

    Разложение делегируется sympy.factorint; для больших n оно может быть очень долгим,
    ограничения по времени нет.
    """
    def __init__(self, primality_test: IPrimalityTest = None):
        self.primality_test = primality_test or MillerRabinTest(MathService())

    def is_prime(self, n: int) -> Primality:
        return self.primality_test.is_prime(n)

    def factorize(self, n: int) -> Factorization:
        if n < 1:
            raise ValueError(f"Разложение определено только для n >= 1, получено {n}")

        logger.debug("factorizing %d (%d bits)", n, n.bit_length())
        try:
            raw = factorint(n)
        except (ValueError, ArithmeticError, RecursionError) as e:
            raise OracleFailure(f"failed to factorize {n}: {e}") from e

        factors = {int(q): int(raw[q]) for q in sorted(raw)}

        product = 1
        for q, e in factors.items():
            product *= q ** e
        if product != n:
            raise OracleFailure(f"incomplete factorization of {n}: {factors}")

        logger.debug("factorization of %d: %s", n, factors)
        return factors
