"""Data structures representing synthesized DNS endpoints."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from dnslib import QTYPE, DNSLabel


class RecordType(str, Enum):
    """DNS record types inferred for endpoint targets."""

    A = "A"
    CNAME = "CNAME"
    SRV = "SRV"

    @property
    def qtype(self) -> int:
        """Numeric DNS type code (`dnslib.QTYPE`)."""
        return getattr(QTYPE, self.value)


class SRVFields(NamedTuple):
    """Priority, weight and port of an SRV record."""

    priority: int
    weight: int
    port: int


def normalize_name(name: str) -> str:
    """Lowercase a DNS name and drop the trailing dot.

    Args:
        name: Domain name, with or without trailing dot.

    Returns:
        Normalized name, e.g. ``"foo.example.org"``.
    """
    return str(DNSLabel(name.strip())).rstrip(".").lower()


@dataclass(slots=True)
class Endpoint:
    """Single DNS endpoint ready for record synthesis.

    Attributes:
        dns_name (str): Normalized domain name, without trailing dot.
        targets (list[str]): Record targets (IPs, hostnames or SRV targets).
        record_type (RecordType): Type of the record to publish.
        ttl (int): Time to live in seconds, 0 when not configured.
        srv (SRVFields | None): SRV fields for SRV endpoints.
    """

    dns_name: str
    targets: list[str]
    record_type: RecordType
    ttl: int = 0
    srv: SRVFields | None = field(default=None)

    def __post_init__(self) -> None:
        self.dns_name = normalize_name(self.dns_name)

    def __str__(self) -> str:
        ttl = self.ttl if self.ttl else "-"
        if self.srv is not None:
            data = [f"{self.srv.priority} {self.srv.weight} {self.srv.port} {t}" for t in self.targets]
        else:
            data = self.targets
        return f"{self.dns_name} {ttl} IN {self.record_type.value} {';'.join(data)}"
