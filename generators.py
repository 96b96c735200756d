from concurrent.futures import Executor
from dataclasses import dataclass, field
import logging
import random
from typing import Dict, Optional, Tuple

from errors import GeneratorSearchExhausted, NotPrimeError
from math_context import Factorization
from primality import Primality

logger = logging.getLogger(__name__)


@dataclass
class GeneratorSearchResult:
    generator: int
    modulus: int
    factors: Factorization
    partial_elements: Dict[int, int] = field(default_factory=dict)
    attempts: Dict[int, int] = field(default_factory=dict)


class GeneratorService:
    """
    Поиск и проверка образующих группы Z_p^* для простого p.
    Поиск по алгоритму Шоупа (A Computational Introduction to Number Theory and Algebra, 11.1)
    """
    def __init__(
            self,
            crypto_service,
            oracle,
            rng: Optional[random.Random] = None,
            max_attempts: Optional[int] = None,
            executor: Optional[Executor] = None
    ):
        """
        :param crypto_service: экземпляр MathService
        :param oracle: оракул простоты и разложения (FactorizationOracle)
        :param rng: источник случайности; по умолчанию новый random.Random()
        :param max_attempts: предел выборок на один простой множитель, None - без предела
        :param executor: если задан (например ThreadPoolExecutor), поиск по множителям
                         идет через executor.map, у каждого множителя свой random.Random
        """
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be positive")

        self.crypto = crypto_service
        self.oracle = oracle
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts
        self.executor = executor

    def get_generator(self, p: int, factors: Optional[Factorization] = None) -> int:
        return self.find_generator(p, factors).generator

    def find_generator(self, p: int, factors: Optional[Factorization] = None) -> GeneratorSearchResult:
        """
        Для каждого q^e из p-1 ищем случайное a с a^((p-1)/q) != 1,
        тогда h = a^((p-1)/q^e) имеет порядок ровно q^e.
        Порядки q^e попарно взаимно просты, поэтому произведение всех h имеет порядок p-1
        """
        self._require_prime(p)
        # WARNING: разложение p-1 может быть очень долгим
        factors = self._group_order_factors(p - 1, factors)

        primes = list(factors)
        exponents = [factors[q] for q in primes]

        if self.executor is None:
            partials = [self._search_partial(p, q, e, self.rng) for q, e in zip(primes, exponents)]
        else:
            rngs = [random.Random(self.rng.getrandbits(64)) for _ in primes]
            partials = list(self.executor.map(
                self._search_partial, [p] * len(primes), primes, exponents, rngs
            ))

        result = GeneratorSearchResult(generator=1, modulus=p, factors=factors)
        for q, (h, attempts) in zip(primes, partials):
            result.partial_elements[q] = h
            result.attempts[q] = attempts
            result.generator = result.generator * h % p

        logger.debug("generator of Z_%d^*: %d, attempts %s", p, result.generator, result.attempts)
        return result

    def is_generator(
            self,
            g: int,
            p: int,
            factors: Optional[Factorization] = None,
            strict: bool = False
    ) -> bool:
        """
        По умолчанию проверяется g^((p-1)/q^e) != 1 для каждого q^e из разложения p-1.
        При e > 1 это слабее, чем g^((p-1)/q) != 1: пропускаются элементы, у которых
        q-часть порядка меньше q^e. strict=True включает проверку g^((p-1)/q) != 1
        """
        self._require_prime(p)
        if g % p == 0:
            return False

        n = p - 1
        factors = self._group_order_factors(n, factors)
        for q, e in factors.items():
            divisor = q if strict else self.crypto.prime_power(q, e)
            if self.crypto.mod_pow(g, n // divisor, p) == 1:
                return False
        return True

    def _search_partial(self, p: int, q: int, e: int, rng) -> Tuple[int, int]:
        n = p - 1
        attempts = 0
        while self.max_attempts is None or attempts < self.max_attempts:
            a = rng.randrange(1, p)
            attempts += 1
            if self.crypto.mod_pow(a, n // q, p) != 1:
                h = self.crypto.mod_pow(a, n // self.crypto.prime_power(q, e), p)
                logger.debug("q=%d e=%d: a=%d after %d attempts, h=%d", q, e, a, attempts, h)
                return h, attempts

        raise GeneratorSearchExhausted(q, attempts)

    def _require_prime(self, p: int) -> None:
        if self.oracle.is_prime(p) != Primality.YES:
            raise NotPrimeError(p)

    def _group_order_factors(self, n: int, factors: Optional[Factorization]) -> Factorization:
        if factors is None:
            return self.oracle.factorize(n)

        # множители не перепроверяются на простоту, только произведение
        product = 1
        for q, e in factors.items():
            if q < 2 or e < 0:
                raise ValueError(f"Invalid factor {q}^{e} in {factors}")
            product *= self.crypto.prime_power(q, e)
        if product != n:
            raise ValueError(f"Factorization {factors} does not multiply to {n}")

        return {q: factors[q] for q in sorted(factors) if factors[q] > 0}
