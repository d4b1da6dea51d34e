"""Introspection documents: reading, fetching and caching them."""

import hashlib
import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests
from graphql import get_introspection_query

from .config import Config
from .schema import Schema

logger = logging.getLogger(__name__)

# Descriptions are never read by the validator
INTROSPECTION_QUERY = get_introspection_query(descriptions=False)


@dataclass
class SchemaProfile:
    """An introspection document and where it came from."""

    source: str
    fetched_at: str
    fingerprint: str
    schema_json: dict

    @classmethod
    def capture(cls, source: str, document: dict) -> "SchemaProfile":
        return cls(
            source=source,
            fetched_at=datetime.now(timezone.utc).isoformat(),
            fingerprint=fingerprint(document),
            schema_json=document,
        )

    def build(self, validate_unknown_types: bool = True) -> Schema:
        """Turn the introspection document into a Schema."""
        return Schema.from_introspection(self.schema_json, validate_unknown_types=validate_unknown_types)


def fingerprint(document: dict) -> str:
    """Short digest identifying a schema version, independent of key order."""
    canonical = json.dumps(document, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()[:16]


def load_schema(
    url: Optional[str] = None,
    schema_file: Optional[str] = None,
    cfg: Optional[Config] = None,
    allow_cache: bool = True,
    refresh: bool = False,
    token: Optional[str] = None,
) -> SchemaProfile:
    """
    Load an introspection document from a file, the cache or the endpoint.

    A schema file wins over a URL. Fetched documents are cached per host
    under `cfg.schema_cache_dir`.

    Raises:
        ValueError: If neither url nor schema_file is given
        RuntimeError: If the endpoint cannot be introspected
    """
    if schema_file:
        logger.debug("Reading schema from %s", schema_file)
        document = json.loads(Path(schema_file).read_text())
        return SchemaProfile.capture(f"file://{schema_file}", document)

    if not url:
        raise ValueError("No URL or schema file provided")

    cache = Path(cache_path_for(url, cfg or Config()))
    if allow_cache and not refresh and cache.exists():
        logger.info("Using cached schema %s", cache)
        return SchemaProfile(**json.loads(cache.read_text()))

    profile = SchemaProfile.capture(url, introspect(url, token))

    cache.parent.mkdir(parents=True, exist_ok=True)
    cache.write_text(json.dumps(asdict(profile), indent=2))
    logger.info("Cached schema for %s at %s", url, cache)
    return profile


def introspect(graphql_url: str, token: Optional[str] = None) -> dict:
    """
    POST the introspection query and return its `data` member.

    Raises:
        RuntimeError: On a non-200 status, a non-JSON body or GraphQL errors
    """
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    logger.info("Introspecting %s", graphql_url)
    resp = requests.post(graphql_url, json={"query": INTROSPECTION_QUERY}, headers=headers, timeout=30)

    if resp.status_code != 200:
        raise RuntimeError(f"Introspection of {graphql_url} failed with status {resp.status_code}")

    payload = _decode(resp)
    if payload.get("errors"):
        raise RuntimeError(f"Introspection errors: {payload['errors']}")
    if not isinstance(payload.get("data"), dict):
        raise RuntimeError(f"Introspection of {graphql_url} returned no data")
    return payload["data"]


def _decode(resp: requests.Response) -> dict:
    try:
        return resp.json()
    except ValueError as e:
        preview = resp.text[:200] + ("..." if len(resp.text) > 200 else "")
        raise RuntimeError(
            f"Introspection of {resp.url} returned a non-JSON response "
            f"({resp.headers.get('Content-Type', 'unknown content type')}): {preview}\n"
            "Check that the URL is the GraphQL endpoint itself and pass --token if it needs one."
        ) from e


def cache_path_for(url: str, cfg: Config) -> str:
    """Cache file for an endpoint, named after its host."""
    host = urlparse(url).hostname or "local"
    return str(Path(cfg.schema_cache_dir) / f"{host}.json")
