import argparse
import logging
import random
import sys
from typing import List, Optional

from errors import NumberTheoryError
from factorization import format_product, parse_factorization
from generators import GeneratorService
from math_context import MathService
from oracle import FactorizationOracle
from primality import BPSWTest, MillerRabinTest, PrimalityTestType

logger = logging.getLogger("zpgen")


def _unsigned(value: str) -> int:
    value = value.strip()
    if not value.isdigit() or not value.isascii():
        raise argparse.ArgumentTypeError(f"expected a non-negative decimal integer, got {value!r}")
    return int(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zpgen",
        description="Number theory utilities for the multiplicative group Z_p^*"
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    parser.add_argument('--primality-test', default=PrimalityTestType.MILLER_RABIN.value,
                        choices=[t.value for t in PrimalityTestType])
    subparsers = parser.add_subparsers(dest="command", required=True)

    gcd_parser = subparsers.add_parser("gcd", help="Greatest common divisor")
    gcd_parser.add_argument('-a', '--a', type=_unsigned, required=True)
    gcd_parser.add_argument('-b', '--b', type=_unsigned, required=True)

    phi_parser = subparsers.add_parser("phi", help="Euler's totient")
    phi_parser.add_argument('-n', '--n', type=_unsigned, required=True)
    phi_parser.add_argument('-f', '--factors', help='Factorization of n, e.g. 2^2,3^1')

    factorize_parser = subparsers.add_parser("factorize", help="Prime factorization")
    factorize_parser.add_argument('-n', '--n', type=_unsigned, required=True)

    get_parser = subparsers.add_parser("get-generator", help="Find a generator of Z_p^*")
    get_parser.add_argument('-m', '--modulus', type=_unsigned, required=True)
    get_parser.add_argument('-f', '--factors', help='Factorization of modulus - 1')
    get_parser.add_argument('--seed', type=int)

    is_parser = subparsers.add_parser("is-generator", help="Check a generator of Z_p^*")
    is_parser.add_argument('-c', '--candidate-gen', type=_unsigned, required=True)
    is_parser.add_argument('-m', '--modulus', type=_unsigned, required=True)
    is_parser.add_argument('-f', '--factors', help='Factorization of modulus - 1')
    is_parser.add_argument('--strict', action='store_true',
                           help='Check g^((p-1)/q) != 1 instead of g^((p-1)/q^e) != 1')

    return parser


def _build_oracle(test_name: str, crypto: MathService) -> FactorizationOracle:
    primality_tests = {
        PrimalityTestType.MILLER_RABIN: MillerRabinTest(crypto),
        PrimalityTestType.BPSW: BPSWTest(),
    }
    return FactorizationOracle(primality_tests[PrimalityTestType(test_name)])


def run(args: argparse.Namespace) -> None:
    crypto = MathService()
    oracle = _build_oracle(args.primality_test, crypto)
    crypto.oracle = oracle

    factors = None
    if getattr(args, "factors", None) is not None:
        factors = parse_factorization(args.factors, oracle)

    if args.command == "gcd":
        print(f"gcd({args.a}, {args.b}) = {crypto.gcd(args.a, args.b)}")

    elif args.command == "phi":
        print(f"phi({args.n}) = {crypto.phi(args.n, factors)}")

    elif args.command == "factorize":
        print(format_product(args.n, oracle.factorize(args.n)))

    elif args.command == "get-generator":
        rng = random.Random(args.seed) if args.seed is not None else None
        service = GeneratorService(crypto, oracle, rng=rng)
        print(f"generator: {service.get_generator(args.modulus, factors)}")

    elif args.command == "is-generator":
        service = GeneratorService(crypto, oracle)
        verdict = service.is_generator(args.candidate_gen, args.modulus, factors, strict=args.strict)
        print("Yes" if verdict else "No")


def main(argv: Optional[List[str]] = None) -> int:
    # аргументы - числа произвольной длины, снимаем ограничение Python 3.11+
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(message)s'
    )
    logger.debug("args: %s", vars(args))

    try:
        run(args)
    except (NumberTheoryError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
