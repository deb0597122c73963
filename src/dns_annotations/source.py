"""Endpoint synthesis from a resource's hostname, targets and annotations."""
from __future__ import annotations

import logging
from typing import Iterable, Mapping

from .annotations import get_srv_record_type_values_from_annotations, get_ttl_from_annotations, suitable_type
from .config import DEFAULT_KEYS, TTL_NOT_CONFIGURED, AnnotationKeys
from .errors import AnnotationError
from .records import Endpoint, RecordType

logger = logging.getLogger(__name__)

# Stable output order for endpoints of one hostname.
ENDPOINT_ORDER: tuple[RecordType, ...] = (RecordType.A, RecordType.CNAME)


def resolve_ttl(annotations: Mapping[str, str], keys: AnnotationKeys = DEFAULT_KEYS) -> int:
    """Return the annotated TTL, falling back to "not configured" on bad values.

    Args:
        annotations: Annotations of the resource.
        keys: Annotation key names to read.

    Returns:
        TTL in seconds, or `TTL_NOT_CONFIGURED` if absent or invalid.
    """
    try:
        return get_ttl_from_annotations(annotations, keys)
    except AnnotationError as exc:
        logger.warning("ignoring annotation %s: %s", exc.key, exc)
        return TTL_NOT_CONFIGURED


def endpoints_for_hostname(
    hostname: str,
    targets: Iterable[str],
    annotations: Mapping[str, str],
    keys: AnnotationKeys = DEFAULT_KEYS,
) -> list[Endpoint]:
    """Build A and CNAME endpoints for a hostname.

    Targets are grouped by `suitable_type`; duplicates are dropped while
    keeping first-seen order. Empty targets are skipped.

    Args:
        hostname: DNS name to publish.
        targets: IPv4 addresses and/or hostnames the name points at.
        annotations: Annotations of the resource.
        keys: Annotation key names to read.

    Returns:
        At most one A and one CNAME endpoint, in that order.
    """
    ttl = resolve_ttl(annotations, keys)

    grouped: dict[RecordType, list[str]] = {}
    for target in targets:
        target = target.strip()
        if not target:
            continue
        bucket = grouped.setdefault(suitable_type(target), [])
        if target not in bucket:
            bucket.append(target)

    out = [Endpoint(hostname, grouped[t], t, ttl) for t in ENDPOINT_ORDER if t in grouped]
    logger.debug("%d endpoints for %s", len(out), hostname)
    return out


def srv_endpoint(
    service_name: str,
    hostname: str,
    target: str,
    annotations: Mapping[str, str],
    keys: AnnotationKeys = DEFAULT_KEYS,
) -> Endpoint:
    """Build an SRV endpoint from the SRV annotations.

    Args:
        service_name: Service name, quoted in error messages.
        hostname: SRV owner name, e.g. ``"_http._tcp.example.org"``.
        target: Host the SRV record points at.
        annotations: Annotations of the resource.
        keys: Annotation key names to read.

    Returns:
        An endpoint of type `RecordType.SRV`.

    Raises:
        AnnotationError: If any SRV annotation is missing or invalid.
    """
    fields = get_srv_record_type_values_from_annotations(service_name, annotations, keys)
    ttl = resolve_ttl(annotations, keys)
    return Endpoint(hostname, [target], RecordType.SRV, ttl, srv=fields)
