"""Annotation key names, value bounds and YAML configuration loading."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)

ANNOTATION_PREFIX = "external-dns.alpha.kubernetes.io/"

TTL_ANNOTATION = "ttl"
SRV_PRIORITY_ANNOTATION = "srv-priority"
SRV_WEIGHT_ANNOTATION = "srv-weight"
SRV_PORT_ANNOTATION = "srv-port"

# Returned when no TTL annotation is present.
TTL_NOT_CONFIGURED = 0
TTL_MINIMUM = 1
TTL_MAXIMUM = (1 << 32) - 1

PORT_MINIMUM = 0
PORT_MAXIMUM = 65535

# YAML field name -> default key suffix.
_KEY_FIELDS: dict[str, str] = {
    "ttl": TTL_ANNOTATION,
    "srv_priority": SRV_PRIORITY_ANNOTATION,
    "srv_weight": SRV_WEIGHT_ANNOTATION,
    "srv_port": SRV_PORT_ANNOTATION,
}


@dataclass(frozen=True, slots=True)
class AnnotationKeys:
    """Full annotation key names read from a resource.

    Attributes:
        ttl: Key holding the record TTL.
        srv_priority: Key holding the SRV priority.
        srv_weight: Key holding the SRV weight.
        srv_port: Key holding the SRV port.
    """

    ttl: str
    srv_priority: str
    srv_weight: str
    srv_port: str

    @classmethod
    def with_prefix(cls, prefix: str) -> AnnotationKeys:
        """Build the default key set under the given prefix."""
        return cls(**{field: prefix + suffix for field, suffix in _KEY_FIELDS.items()})


DEFAULT_KEYS = AnnotationKeys.with_prefix(ANNOTATION_PREFIX)


class AnnotationConfig:
    """Annotation key configuration loaded from a YAML file.

    Args:
        path: Filesystem path to the YAML configuration.

    Attributes:
        path: Path to the YAML config file.
        prefix: Annotation prefix used for keys not overridden explicitly.
        keys: Currently active annotation keys.
    """

    def __init__(self, path: str) -> None:
        """Initialize and load configuration.

        Args:
            path: Path to YAML file.
        """
        self.path = path
        self._mtime = 0.0
        self.prefix = ANNOTATION_PREFIX
        self.keys = DEFAULT_KEYS
        self.load(force=True)

    def load(self, force: bool = False) -> None:
        """Load or reload YAML configuration.

        Args:
            force: Reload regardless of file mtime.

        Raises:
            ValueError: On invalid YAML structure or key data.
            FileNotFoundError: If the config is missing and `force=True`.
        """
        try:
            st = os.stat(self.path)
        except FileNotFoundError:
            if force:
                raise
            return

        if not force and st.st_mtime <= self._mtime:
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML parsing error: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError(f"configuration must be a mapping, got {type(data).__name__}")

        prefix = data.get("annotation_prefix", ANNOTATION_PREFIX)
        if not isinstance(prefix, str):
            raise ValueError(f"annotation_prefix must be a string (got {prefix!r})")

        overrides = data.get("keys") or {}
        if not isinstance(overrides, dict):
            raise ValueError("'keys' must be a mapping")
        unknown = sorted(set(overrides) - set(_KEY_FIELDS))
        if unknown:
            raise ValueError(f"unknown annotation keys: {', '.join(map(str, unknown))}")

        resolved: dict[str, str] = {}
        for field, suffix in _KEY_FIELDS.items():
            key = overrides.get(field, prefix + suffix)
            if not isinstance(key, str) or not key.strip():
                raise ValueError(f"keys.{field}: non-empty string required (got {key!r})")
            resolved[field] = key.strip()

        self.prefix = prefix
        self.keys = AnnotationKeys(**resolved)
        self._mtime = st.st_mtime
        logger.info("annotation configuration loaded from %s", self.path)

    def maybe_reload(self) -> None:
        """Reload on mtime change; keep last good config on errors.

        Returns:
            None
        """
        try:
            self.load(force=False)
        except (ValueError, OSError) as exc:
            logger.error("failed to reload configuration: %s", exc)
