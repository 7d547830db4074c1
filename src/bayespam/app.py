# =============================================================================
# bayespam Command Line
# =============================================================================
# Thin wrapper around the classifier for use from a shell:
#
#   bayespam train spam "Don't forget our special promotion!"
#   bayespam train ham "Hi Bob, don't forget our meeting today."
#   bayespam score "Special promotion on our new weightloss."
#   bayespam identify - < message.txt
#
# The model location comes from --model, the config file, or the XDG data
# directory, in that order.
# =============================================================================

import argparse
import logging
import sys
from pathlib import Path

from bayespam import __app_name__, __version__
from bayespam.config import Config, ConfigError, print_paths
from bayespam.spam import ArithmeticDegeneracy, Classifier, ModelError, ModelReadError

logger = logging.getLogger(__name__)


# =============================================================================
# Commands
# =============================================================================

def read_message(value: str) -> str:
    """Return the message argument, reading stdin for '-'."""
    if value == "-":
        return sys.stdin.read()
    return value


def cmd_score(args: argparse.Namespace, config: Config) -> int:
    """Print the spam score of a message."""
    classifier = Classifier.from_file(args.model or config.model_path())
    print(f"{classifier.score(read_message(args.message)):.4f}")
    return 0


def cmd_identify(args: argparse.Namespace, config: Config) -> int:
    """Print whether a message is spam."""
    classifier = Classifier.from_file(args.model or config.model_path())
    print(classifier.identify(read_message(args.message)))
    return 0


def cmd_check(args: argparse.Namespace, config: Config) -> int:
    """Print both the score and the decision for a message."""
    classifier = Classifier.from_file(args.model or config.model_path())
    message = read_message(args.message)
    print(f"{classifier.score(message):.4f}")
    print(classifier.identify(message))
    return 0


def cmd_train(args: argparse.Namespace, config: Config) -> int:
    """Train the model with a labeled message and save it."""
    model_path = args.model or config.model_path()

    if model_path.exists():
        classifier = Classifier.from_file(model_path)
    else:
        logger.info(f"No model at {model_path}, starting from an empty one")
        classifier = Classifier()

    classifier.train(read_message(args.message), is_spam=args.label == "spam")

    pretty = config.model.pretty if args.pretty is None else args.pretty
    classifier.save(model_path, pretty=pretty)
    return 0


def cmd_stats(args: argparse.Namespace, config: Config) -> int:
    """Print model statistics."""
    stats = Classifier.from_file(args.model or config.model_path()).stats
    print(f"Tokens:      {stats.token_count}")
    print(f"Spam total:  {stats.spam_total}")
    print(f"Ham total:   {stats.ham_total}")
    return 0


def cmd_paths(args: argparse.Namespace, config: Config) -> int:
    """Print configuration paths."""
    print_paths(config)
    return 0


# =============================================================================
# CLI Entry Point
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    """
    Build the command-line parser.

    Returns:
        Parser with one subcommand per operation.
    """
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="bayespam: a simple Bayesian spam classifier",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: XDG config location)",
    )

    parser.add_argument(
        "--model",
        type=Path,
        help="Path to model file (default: from config, else XDG data location)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    message_help = "Message text, or '-' to read from stdin"

    score = commands.add_parser("score", help="Print the spam score of a message")
    score.add_argument("message", help=message_help)
    score.set_defaults(handler=cmd_score)

    identify = commands.add_parser("identify", help="Print True if a message is spam")
    identify.add_argument("message", help=message_help)
    identify.set_defaults(handler=cmd_identify)

    check = commands.add_parser("check", help="Print score and decision for a message")
    check.add_argument("message", help=message_help)
    check.set_defaults(handler=cmd_check)

    train = commands.add_parser("train", help="Train the model with a labeled message")
    train.add_argument("label", choices=["spam", "ham"], help="Message label")
    train.add_argument("message", help=message_help)
    train.add_argument(
        "--pretty",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Write indented JSON (default: from config)",
    )
    train.set_defaults(handler=cmd_train)

    stats = commands.add_parser("stats", help="Print model statistics")
    stats.set_defaults(handler=cmd_stats)

    paths = commands.add_parser("paths", help="Print configuration paths")
    paths.set_defaults(handler=cmd_paths)

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for bayespam.

    This function:
        1. Parses command-line arguments
        2. Loads configuration and sets up logging
        3. Runs the selected command

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = build_parser().parse_args(argv)

    try:
        config = Config.load(args.config)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.debug else config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.handler(args, config)
    except ModelReadError as e:
        logger.error(f"Could not load model: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ModelError, ArithmeticDegeneracy) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
