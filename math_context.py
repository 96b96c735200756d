from typing import Dict, Optional

Factorization = Dict[int, int]


class MathService:
    def __init__(self, oracle=None):
        """
        :param oracle: оракул разложения (FactorizationOracle), нужен только для phi
                       без заранее известного разложения
        """
        self.oracle = oracle

    @staticmethod
    def gcd(a, b):
        """
        Алгоритм Евклида: gcd(a, 0) = a, иначе gcd(b, a mod b)
        gcd(0, 0) = 0
        """
        if a < 0 or b < 0:
            raise ValueError("gcd is defined for non-negative integers only")

        while b != 0:
            r = a % b
            a = b
            b = r
        return a

    @staticmethod
    def mod_pow(base, exponent, modulus):
        """
        base^exponent mod modulus, биты степени просматриваются от младших к старшим
        """
        if modulus < 1:
            raise ValueError("Modulus must be positive")
        if exponent < 0:
            raise ValueError("Отрицательная степень не поддерживается")

        acc = 1 % modulus
        square = base % modulus
        for bit in bin(exponent)[:1:-1]:
            if bit == "1":
                acc = acc * square % modulus
            square = square * square % modulus
        return acc

    @staticmethod
    def prime_power(q: int, e: int) -> int:
        # q^e как обычное целое, без приведения по модулю
        return q ** e

    def phi(self, n: int, factors: Optional[Factorization] = None) -> int:
        """
        Функция Эйлера: phi(n) = prod q^(e-1) * (q-1) по разложению n = prod q^e

        Переданное разложение используется как есть и не сверяется с n:
        за его корректность отвечает вызывающий код.
        """
        if factors is None:
            if self.oracle is None:
                raise ValueError("Factorization oracle is not configured")
            factors = self.oracle.factorize(n)

        result = 1
        for q, e in factors.items():
            if e == 0:
                continue
            result *= self.prime_power(q, e - 1) * (q - 1)
        return result
