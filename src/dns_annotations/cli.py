"""CLI for checking DNS annotations."""
from __future__ import annotations

import argparse
import logging
import sys

import yaml

from .annotations import get_ttl_from_annotations
from .config import DEFAULT_KEYS, AnnotationConfig
from .errors import AnnotationError
from .source import endpoints_for_hostname, srv_endpoint

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list; defaults to `sys.argv[1:]`.

    Returns:
        argparse.Namespace: Parsed CLI options:
            - annotations (str): Path to a YAML mapping of annotations.
            - config (str | None): Path to YAML annotation key config.
            - service (str): Service name used in error messages.
            - hostname (str): DNS name to publish.
            - target (list[str]): Record targets.
            - srv (bool): Build an SRV endpoint instead of A/CNAME.
            - strict_ttl (bool): Fail on an invalid TTL annotation instead of ignoring it.
            - log_level (str): Logging level.
    """
    parser = argparse.ArgumentParser(
        description="Synthesize DNS endpoints from resource annotations",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--annotations", required=True, help="Path to YAML annotations mapping")
    parser.add_argument("--config", default=None, help="Path to YAML annotation key config")
    parser.add_argument("--service", default="default", help="Service name")
    parser.add_argument("--hostname", required=True, help="DNS name to publish")
    parser.add_argument("--target", action="append", default=[], help="Record target (repeatable)")
    parser.add_argument("--srv", action="store_true", help="Build an SRV endpoint")
    parser.add_argument("--strict-ttl", action="store_true", help="Fail on an invalid TTL annotation")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    return parser.parse_args(argv)


def load_annotations(path: str) -> dict[str, str]:
    """Read an annotations mapping from YAML.

    Scalars are read verbatim as strings, as they are on Kubernetes objects,
    so `1_000` or `0x10` reach validation unchanged.

    Raises:
        ValueError: On invalid YAML, a non-mapping document or a non-string value.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.load(f, Loader=yaml.BaseLoader) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"YAML parsing error: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"annotations must be a mapping, got {type(data).__name__}")
    for key, value in data.items():
        if not isinstance(value, str):
            raise ValueError(f"annotation {key!r}: string value required, got {type(value).__name__}")
    return data


def main(argv: list[str] | None = None) -> int:
    """Run the CLI entry point.

    Prints one line per synthesized endpoint.

    Returns:
        int: 0 on success, 1 on configuration or annotation errors.
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        keys = AnnotationConfig(args.config).keys if args.config else DEFAULT_KEYS
        annotations = load_annotations(args.annotations)
    except (ValueError, OSError) as exc:
        logger.error("failed to load input: %s", exc)
        return 1

    try:
        if args.strict_ttl:
            get_ttl_from_annotations(annotations, keys)
        if args.srv:
            if len(args.target) != 1:
                logger.error("--srv requires exactly one --target")
                return 1
            endpoints = [srv_endpoint(args.service, args.hostname, args.target[0], annotations, keys)]
        else:
            endpoints = endpoints_for_hostname(args.hostname, args.target, annotations, keys)
    except AnnotationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for ep in endpoints:
        print(ep)
    return 0


if __name__ == "__main__":
    sys.exit(main())
