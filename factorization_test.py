import sys
import unittest

from errors import (
    DuplicatePrimeFactorError,
    FactorizationParseError,
    MalformedFactorizationTokenError,
)
from factorization import format_factorization, format_product, parse_factorization
from oracle import FactorizationOracle


class TestFactorizationParser(unittest.TestCase):
    def setUp(self):
        self.oracle = FactorizationOracle()

    def test_good_inputs(self):
        cases = [
            ("2^1", {2: 1}),
            ("2^256", {2: 256}),
            ("5^2,3^1", {3: 1, 5: 2}),
            ("2^1,3^2, 5^3", {2: 1, 3: 2, 5: 3}),
            ("2^2,3^1", {2: 2, 3: 1}),
            ("  7 ^ 1 ,  2 ^ 0  ", {2: 0, 7: 1}),
            ("2305843009213693951^1", {2 ** 61 - 1: 1}),
        ]
        for text, expected in cases:
            with self.subTest(text=text):
                self.assertEqual(parse_factorization(text, self.oracle), expected)

    def test_result_is_ascending(self):
        factors = parse_factorization("13^1,2^3,7^2,3^1", self.oracle)
        self.assertEqual(list(factors), [2, 3, 7, 13])

    def test_malformed_inputs(self):
        malformed_inputs = [
            "", "^", "2^", "^2", "2^^", "2^^3", "a^b", "2^3^4", "garbage", ",", "2,3", "2^3,",
            "2^3,,3^2", "4^2, 3^6", "2^3 5^2", "2^3,2^5", "-2^1", "2^-1", "+2^1", "2^1.5",
            "1^1", "0^1",
        ]
        for text in malformed_inputs:
            with self.subTest(text=text):
                with self.assertRaises(FactorizationParseError):
                    parse_factorization(text, self.oracle)

    def test_each_rejection_independently(self):
        cases = [
            ("", MalformedFactorizationTokenError),
            ("23", MalformedFactorizationTokenError),
            ("x^2", MalformedFactorizationTokenError),
            ("3^y", MalformedFactorizationTokenError),
            ("4^2", MalformedFactorizationTokenError),
            ("2^2,2^3", DuplicatePrimeFactorError),
        ]
        for text, error_type in cases:
            with self.subTest(text=text):
                with self.assertRaises(FactorizationParseError) as ctx:
                    parse_factorization(text, self.oracle)
                self.assertEqual(len(ctx.exception.errors), 1)
                self.assertIsInstance(ctx.exception.errors[0], error_type)

    def test_errors_are_aggregated(self):
        with self.assertRaises(FactorizationParseError) as ctx:
            parse_factorization("2^1,4^2,x^1,3,2^5,5^1", self.oracle)

        errors = ctx.exception.errors
        self.assertEqual([e.token for e in errors], ["4^2", "x^1", "3", "2^5"])
        self.assertIsInstance(errors[-1], DuplicatePrimeFactorError)
        self.assertEqual(errors[-1].prime, 2)
        self.assertIn("4^2", str(ctx.exception))
        self.assertIn("x^1", str(ctx.exception))

    def test_overlong_exponent_is_aggregated(self):
        with self.assertRaises(FactorizationParseError) as ctx:
            parse_factorization("4^1,2^" + "1" * 5000 + ",x^1", self.oracle)

        errors = ctx.exception.errors
        self.assertEqual(len(errors), 3)
        self.assertTrue(all(isinstance(e, MalformedFactorizationTokenError) for e in errors))
        self.assertIn("invalid exponent", errors[1].reason)

    def test_exponent_above_machine_integer(self):
        with self.assertRaises(FactorizationParseError) as ctx:
            parse_factorization("2^" + str(sys.maxsize + 1), self.oracle)
        self.assertIn("invalid exponent", ctx.exception.errors[0].reason)

    def test_probable_prime_is_rejected(self):
        # 2^127 - 1 выше детерминированного диапазона, оракул отвечает PROBABLE
        with self.assertRaises(FactorizationParseError):
            parse_factorization("170141183460469231731687303715884105727^1", self.oracle)

    def test_parse_error_is_value_error(self):
        with self.assertRaises(ValueError):
            parse_factorization("4^2", self.oracle)

    def test_canonical_round_trip(self):
        for text in ["2^2,3^1", "3^1,2^2", "101^3, 2^10,5^1", "2^256"]:
            with self.subTest(text=text):
                factors = parse_factorization(text, self.oracle)
                canonical = format_factorization(factors)
                self.assertEqual(parse_factorization(canonical, self.oracle), factors)
                self.assertEqual(format_factorization(parse_factorization(canonical, self.oracle)), canonical)

        self.assertEqual(format_factorization({5: 1, 2: 2}), "2^2,5^1")

    def test_format_product(self):
        self.assertEqual(format_product(12, {2: 2, 3: 1}), "12 = 2^2 · 3^1")
        self.assertEqual(format_product(1, {}), "1 = 1")


if __name__ == '__main__':
    unittest.main()
