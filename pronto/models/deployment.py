"""
Deployment Models

Dataclass models for the deployment request and the API's response.
"""

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any, Dict, List


def decode_certificate(value: str) -> bytes:
    """Decode base64 text, allowing line breaks but no other stray characters."""
    return base64.b64decode("".join(value.split()), validate=True)


@dataclass(frozen=True)
class DatabaseChoice:
    """A database type Compose can deploy."""

    name: str
    value: str


@dataclass(frozen=True)
class DeploymentRequest:
    """Body of POST /deployments."""

    account_id: str
    datacenter: str
    name: str
    type: str

    def __post_init__(self):
        if not self.account_id:
            raise ValueError("DeploymentRequest requires a resolved account id")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the nested payload the API expects."""
        return {
            "deployment": {
                "account_id": self.account_id,
                "datacenter": self.datacenter,
                "name": self.name,
                "type": self.type,
            }
        }


@dataclass
class ConnectionStrings:
    """Connection strings returned for a deployment."""

    cli: List[str]
    direct: List[str]

    @property
    def first_cli(self) -> str:
        return self.cli[0]

    @property
    def first_direct(self) -> str:
        return self.direct[0]


@dataclass
class DeploymentResult:
    """Deployment as returned by the API."""

    ca_certificate_base64: str
    connection_strings: ConnectionStrings
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def ca_certificate(self) -> bytes:
        """Decoded CA certificate bytes."""
        return decode_certificate(self.ca_certificate_base64)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeploymentResult":
        """
        Build from the API response body.

        Raises:
            ValueError: If a required field is missing or unusable
        """
        if not isinstance(data, dict):
            raise ValueError("Response body is not a JSON object")

        certificate = data.get("ca_certificate_base64")
        if not isinstance(certificate, str):
            raise ValueError("Missing ca_certificate_base64")
        try:
            decode_certificate(certificate)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"ca_certificate_base64 is not valid base64: {e}")

        strings = data.get("connection_strings")
        if not isinstance(strings, dict):
            raise ValueError("Missing connection_strings")

        variants = {}
        for variant in ("cli", "direct"):
            values = strings.get(variant)
            if not isinstance(values, list) or not values:
                raise ValueError(f"connection_strings.{variant} is empty")
            if not all(isinstance(v, str) for v in values):
                raise ValueError(f"connection_strings.{variant} must contain strings")
            variants[variant] = values

        return cls(
            ca_certificate_base64=certificate,
            connection_strings=ConnectionStrings(**variants),
            raw=data,
        )
