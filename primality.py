from abc import ABC, abstractmethod
from enum import Enum
import random
from typing import Optional, Sequence

from sympy import isprime


class Primality(Enum):
    YES = "yes"
    NO = "no"
    PROBABLE = "probable"


class PrimalityTestType(Enum):
    MILLER_RABIN = "miller_rabin"
    BPSW = "bpsw"


class IPrimalityTest(ABC):
    @abstractmethod
    def is_prime(self, n: int) -> Primality:
        ...


class MillerRabinTest(IPrimalityTest):
    """
    Тест Миллера-Рабина.
    До DETERMINISTIC_LIMIT проверка по первым 13 простым основаниям точная (YES/NO),
    выше основания выбираются случайно и ответ для простых чисел PROBABLE
    """
    DETERMINISTIC_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)
    DETERMINISTIC_LIMIT = 3317044064679887385961981

    def __init__(self, crypto_service, min_probability: float = 0.99,
                 rng: Optional[random.Random] = None):
        if not (0.5 <= min_probability < 1.0):
            raise ValueError("Вероятность должна быть в диапазоне [0.5, 1)")

        self.crypto = crypto_service
        self.min_probability = min_probability
        self.rng = rng or random.Random()

    def is_prime(self, n: int) -> Primality:
        if n < 2:
            return Primality.NO
        for p in self.DETERMINISTIC_BASES:
            if n == p:
                return Primality.YES
            if n % p == 0:
                return Primality.NO

        if n < self.DETERMINISTIC_LIMIT:
            bases: Sequence[int] = self.DETERMINISTIC_BASES
            verdict = Primality.YES
        else:
            num_iterations = self._calculate_iterations(self.min_probability)
            bases = [self.rng.randint(2, n - 2) for _ in range(num_iterations)]
            verdict = Primality.PROBABLE

        for a in bases:
            if not self._single_test_iteration(n, a):
                return Primality.NO

        return verdict

    def _calculate_iterations(self, min_probability: float) -> int:
        # ошибка одного раунда не больше 1/4
        error_probability = 1 - min_probability
        k = 1
        while (0.25 ** k) > error_probability:
            k += 1
        return k

    def _single_test_iteration(self, n: int, a: int) -> bool:
        s, d = 0, n - 1
        while d % 2 == 0:
            s += 1
            d //= 2

        x = self.crypto.mod_pow(a, d, n)
        if x == 1 or x == n - 1:
            return True

        for _ in range(s - 1):
            x = self.crypto.mod_pow(x, 2, n)
            if x == n - 1:
                return True

        return False


class BPSWTest(IPrimalityTest):
    """
    sympy.isprime: точный ответ до 2^64, выше это тест BPSW
    """
    EXACT_LIMIT = 1 << 64

    def is_prime(self, n: int) -> Primality:
        if not isprime(n):
            return Primality.NO
        return Primality.YES if n < self.EXACT_LIMIT else Primality.PROBABLE
