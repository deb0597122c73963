"""Read TTL, SRV fields and record types from resource annotations.

All functions here are pure: they only read the given mapping and either
return typed values or raise an `AnnotationError` subclass.
"""
from __future__ import annotations

import ipaddress
import logging
import re
from typing import Callable, Mapping

from .config import (
    DEFAULT_KEYS,
    PORT_MAXIMUM,
    PORT_MINIMUM,
    TTL_MAXIMUM,
    TTL_MINIMUM,
    TTL_NOT_CONFIGURED,
    AnnotationKeys,
)
from .duration import duration_seconds
from .errors import AnnotationParseError, AnnotationRangeError, MissingAnnotationError
from .records import RecordType, SRVFields

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")

INT64_MINIMUM = -(1 << 63)
INT64_MAXIMUM = (1 << 63) - 1
# Digits of INT64_MAXIMUM; longer inputs overflow without calling int().
_INT64_DIGITS = len(str(INT64_MAXIMUM))


def parse_int(value: str) -> int:
    """Parse a base-10 signed 64-bit integer with an optional sign.

    Raises:
        ValueError: If `value` is not a plain decimal integer.
        OverflowError: If the integer does not fit in 64 bits.
    """
    if not _INTEGER.fullmatch(value):
        raise ValueError(f"invalid integer {value!r}")
    if len(value.lstrip("+-").lstrip("0")) > _INT64_DIGITS:
        raise OverflowError(f"integer out of range {value!r}")
    number = int(value)
    if number < INT64_MINIMUM or number > INT64_MAXIMUM:
        raise OverflowError(f"integer out of range {value!r}")
    return number


def parse_ttl(value: str) -> int:
    """Parse a TTL given as a duration (``"10m"``) or integer seconds (``"600"``).

    Raises:
        ValueError: If `value` is neither.
        OverflowError: If `value` is an integer outside 64 bits.
    """
    try:
        return duration_seconds(value)
    except ValueError:
        return parse_int(value)


def _ttl_range_error(key: str, value: str) -> AnnotationRangeError:
    return AnnotationRangeError(
        f"TTL value must be between [{TTL_MINIMUM}, {TTL_MAXIMUM}]", key, value, TTL_MINIMUM, TTL_MAXIMUM
    )


def get_ttl_from_annotations(annotations: Mapping[str, str], keys: AnnotationKeys = DEFAULT_KEYS) -> int:
    """Return the TTL configured by the TTL annotation.

    Args:
        annotations: Annotations of the resource.
        keys: Annotation key names to read.

    Returns:
        TTL in seconds, or `TTL_NOT_CONFIGURED` (0) when the annotation is absent.

    Raises:
        AnnotationParseError: The value is neither an integer nor a duration.
        AnnotationRangeError: The value is outside [TTL_MINIMUM, TTL_MAXIMUM].
    """
    value = annotations.get(keys.ttl)
    if value is None:
        return TTL_NOT_CONFIGURED

    try:
        ttl = parse_ttl(value)
    except OverflowError as exc:
        raise _ttl_range_error(keys.ttl, value) from exc
    except ValueError as exc:
        raise AnnotationParseError(f'"{value}" is not a valid TTL value', keys.ttl, value) from exc

    if ttl < TTL_MINIMUM or ttl > TTL_MAXIMUM:
        raise _ttl_range_error(keys.ttl, value)

    logger.debug("TTL annotation %s=%r -> %d", keys.ttl, value, ttl)
    return ttl


def _required_int(
    service_name: str, annotations: Mapping[str, str], key: str, name: str, parse_label: str
) -> tuple[str, int]:
    """Read one SRV annotation as a signed 64-bit integer.

    Args:
        service_name: Service name, quoted in error messages.
        annotations: Annotations of the resource.
        key: Annotation key to read.
        name: Field name used in the missing-value message.
        parse_label: Field name used in the parse-failure message.

    Returns:
        Tuple of (raw annotation value, parsed integer).

    Raises:
        MissingAnnotationError: The annotation is absent.
        AnnotationParseError: The value is not an integer or overflows 64 bits.
    """
    value = annotations.get(key)
    if value is None:
        raise MissingAnnotationError(
            f'must specify {name} value for SRV record. service "{service_name}"',
            key,
            service=service_name,
        )
    try:
        return value, parse_int(value)
    except (ValueError, OverflowError) as exc:
        raise AnnotationParseError(
            f'{parse_label} value must be int number, got "{value}". service "{service_name}"',
            key,
            value,
            service_name,
        ) from exc


def get_srv_record_type_values_from_annotations(
    service_name: str,
    annotations: Mapping[str, str],
    keys: AnnotationKeys = DEFAULT_KEYS,
) -> SRVFields:
    """Return priority, weight and port of an SRV record.

    Checks run in a fixed order and stop at the first failure: priority
    presence and syntax, weight presence and syntax, port presence, syntax
    and range. Priority and weight accept any signed 64-bit integer.

    Args:
        service_name: Name of the service, quoted in error messages.
        annotations: Annotations of the resource.
        keys: Annotation key names to read.

    Returns:
        `SRVFields` holding the three parsed integers.

    Raises:
        MissingAnnotationError: One of the three annotations is absent.
        AnnotationParseError: One of the values is not a 64-bit integer.
        AnnotationRangeError: The port is outside [PORT_MINIMUM, PORT_MAXIMUM].
    """
    # "priorty" is the historical wording consumers match on.
    steps: list[tuple[str, str, str, Callable[[str, int], None] | None]] = [
        (keys.srv_priority, "priority", "priorty", None),
        (keys.srv_weight, "weight", "weight", None),
        (keys.srv_port, "port", "port", _check_port_range(service_name, keys.srv_port)),
    ]

    values: list[int] = []
    for key, name, parse_label, check in steps:
        raw, number = _required_int(service_name, annotations, key, name, parse_label)
        if check is not None:
            check(raw, number)
        values.append(number)

    fields = SRVFields(*values)
    logger.debug("SRV annotations for service %s -> %s", service_name, fields)
    return fields


def _check_port_range(service_name: str, key: str) -> Callable[[str, int], None]:
    """Build the range check for the SRV port step.

    Args:
        service_name: Service name, quoted in error messages.
        key: Port annotation key.

    Returns:
        Callable taking (raw value, parsed port) that raises
        `AnnotationRangeError` when the port is outside [PORT_MINIMUM, PORT_MAXIMUM].
    """
    def check(raw: str, port: int) -> None:
        if port < PORT_MINIMUM or port > PORT_MAXIMUM:
            raise AnnotationRangeError(
                f'port value must be between [{PORT_MINIMUM}, {PORT_MAXIMUM}], got "{raw}". service "{service_name}"',
                key,
                raw,
                PORT_MINIMUM,
                PORT_MAXIMUM,
                service_name,
            )

    return check


def suitable_type(target: str) -> RecordType:
    """Infer the record type for a target.

    Args:
        target: IPv4 literal or hostname.

    Returns:
        `RecordType.A` for IPv4 literals, `RecordType.CNAME` otherwise.
    """
    try:
        ipaddress.IPv4Address(target)
    except ipaddress.AddressValueError:
        return RecordType.CNAME
    return RecordType.A
