# file: src/secded_ecc/cli.py

"""
Command-line interface for the SECDED word codec.

Examples:
  # Walk through the reference corruption scenarios
  secded-ecc demo

  # Encode a word, then read it back with one data bit flipped
  secded-ecc encode 0xDEADBEEFCAFEBABE
  secded-ecc decode 0xDEADBEEFCAFEBABF 0x3A

  # Flip 3 random bits in each of 10000 random words
  secded-ecc campaign --words 10000 --flips 3 --seed 1
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .codec import SECDEDCodec
from .config import load_config
from .errors import ECCError, ECCUncorrectableError
from .metrics import run_fault_campaign
from .scenarios import format_outcome, run_scenarios
from .word import ProtectedWord


EXIT_OK = 0
EXIT_UNCORRECTABLE = 2
EXIT_ERROR = 1


def setup_logging(verbose: bool = True):
    """Configure logging for the command-line tool."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def _hex_word(text: str) -> int:
    # Memory words are always read as hex; a 0x prefix is optional
    try:
        return int(text, 16)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex value: {text!r}")


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='secded-ecc',
        description='SECDED (72, 64) memory word codec',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to YAML configuration (default: packaged default_config.yaml)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('demo', help='Run the reference corruption scenarios')

    encode_parser = subparsers.add_parser('encode', help='Compute the ECC byte for a data word')
    encode_parser.add_argument('data', type=_hex_word, help='64-bit data word, hex')

    decode_parser = subparsers.add_parser('decode', help='Read back a stored data word and ECC byte')
    decode_parser.add_argument('data', type=_hex_word, help='Stored 64-bit data word, hex')
    decode_parser.add_argument('ecc', type=_hex_word, help='Stored 8-bit ECC byte, hex')

    campaign_parser = subparsers.add_parser('campaign', help='Run a random fault-injection campaign')
    campaign_parser.add_argument('--words', type=int, default=None, help='Number of random words')
    campaign_parser.add_argument('--flips', type=int, default=None, help='Bits flipped per word')
    campaign_parser.add_argument('--seed', type=int, default=None, help='Random seed')
    campaign_parser.add_argument('--json', action='store_true', help='Print the report as JSON')

    return parser.parse_args(argv)


def _cmd_demo(codec: SECDEDCodec, args) -> int:
    for outcome in run_scenarios():
        print(format_outcome(outcome))
        print()
    return EXIT_OK


def _cmd_encode(codec: SECDEDCodec, args) -> int:
    word = codec.encode(args.data)
    print(word)
    print(f"ecc=0x{word.ecc:02X}")
    return EXIT_OK


def _cmd_decode(codec: SECDEDCodec, args) -> int:
    word = ProtectedWord(data=args.data, ecc=args.ecc)
    print(f"Stored:    {word}")
    try:
        result = codec.decode(word)
    except ECCUncorrectableError as e:
        print("Recovered: <invalid>")
        print(f"Error: {e}")
        return EXIT_UNCORRECTABLE
    print(f"Recovered: {word}")
    print(f"Status: {result.status}")
    return EXIT_OK


def _cmd_campaign(codec: SECDEDCodec, args, config: dict) -> int:
    campaign_config = config.get('campaign', {})
    num_words = args.words if args.words is not None else campaign_config.get('num_words', 1000)
    num_flips = args.flips if args.flips is not None else campaign_config.get('num_flips', 2)
    seed = args.seed if args.seed is not None else campaign_config.get('seed')

    report = run_fault_campaign(num_words, num_flips, seed=seed)

    if args.json:
        print(json.dumps(report.as_dict(), indent=2))
    else:
        print(f"{num_words} words, {num_flips} flipped bits per word, seed={seed}")
        for outcome, count in report.counts.items():
            print(f"  {outcome:<18} {count:>8} ({report.rate(outcome):.2%})")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command-line tool."""
    args = parse_arguments(argv)

    try:
        config = load_config(args.config)
        setup_logging(verbose=args.verbose or config.get('system', {}).get('verbose', False))
        codec = SECDEDCodec.from_config(config)

        if args.command == 'demo':
            return _cmd_demo(codec, args)
        if args.command == 'encode':
            return _cmd_encode(codec, args)
        if args.command == 'decode':
            return _cmd_decode(codec, args)
        return _cmd_campaign(codec, args, config)

    except (ECCError, ValueError) as e:
        logging.error(f"{args.command} failed: {e}")
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
