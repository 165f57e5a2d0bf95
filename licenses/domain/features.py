"""
Feature grants carried inside the signed features claim.

These structures are never stored as rows; they only exist serialized
inside a license token.
"""
import json
from dataclasses import asdict, dataclass, field
from typing import Any, List, Mapping, Sequence


def _integer(data: Mapping[str, Any], name: str, owner: str) -> int:
    if name not in data:
        raise ValueError(f"{owner} is missing '{name}'")
    value = data[name]
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"{owner} '{name}' must be an integer")
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{owner} '{name}' must be an integer") from exc


@dataclass(frozen=True)
class RateLimit:
    """Opaque rate limit attached to a feature grant."""

    name: str
    limit: int
    period: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RateLimit":
        """
        Raises:
            ValueError: If the entry is not an object with name, limit and period
        """
        if not isinstance(data, Mapping):
            raise ValueError("rate limit entry must be an object")
        if not isinstance(data.get("name"), str):
            raise ValueError("rate limit 'name' must be a string")
        return cls(
            name=data["name"],
            limit=_integer(data, "limit", "rate limit"),
            period=_integer(data, "period", "rate limit"),
        )


@dataclass(frozen=True)
class FeatureGrant:
    """
    A SKU granted by a license until expiry (epoch seconds).
    """

    sku: str
    expiry: int
    rate_limits: List[RateLimit] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FeatureGrant":
        """
        Build a grant from its claim representation.

        Raises:
            ValueError: If the mapping has the wrong shape
        """
        if not isinstance(data, Mapping):
            raise ValueError("feature entry must be an object")
        sku = data.get("sku")
        if not isinstance(sku, str) or not sku:
            raise ValueError("feature 'sku' must be a non-empty string")
        rate_limits = data.get("rate_limits") or []
        if not isinstance(rate_limits, list):
            raise ValueError("feature 'rate_limits' must be a list")
        return cls(
            sku=sku,
            expiry=_integer(data, "expiry", "feature"),
            rate_limits=[RateLimit.from_dict(item) for item in rate_limits],
        )


def serialize_features(features: Sequence[FeatureGrant]) -> str:
    """Serialize grants to the JSON string stored in the features claim."""
    return json.dumps([asdict(feature) for feature in features], separators=(",", ":"))


def parse_features(payload: str) -> List[FeatureGrant]:
    """
    Deserialize the features claim.

    Args:
        payload: JSON string from the token

    Returns:
        List of FeatureGrant

    Raises:
        ValueError: If the payload is not a JSON list of grants
    """
    try:
        data = json.loads(payload)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ValueError("Malformed features claim: not valid JSON") from exc
    if not isinstance(data, list):
        raise ValueError("Malformed features claim: expected a list")
    try:
        return [FeatureGrant.from_dict(item) for item in data]
    except ValueError as exc:
        raise ValueError(f"Malformed features claim: {exc}") from exc
