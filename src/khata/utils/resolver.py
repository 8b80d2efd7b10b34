"""Utilities for resolving user-typed references to stored IDs."""

from typing import Iterable

from khata.domain.client import ClientService

MIN_PREFIX = 4


def resolve_client(client_service: ClientService, client: str) -> str:
    """Resolve a client name or ID to a client ID.

    Raises:
        ValueError: If no client matches, or a name matches several clients
    """
    client = client.strip()
    if client_service.get_client(client) is not None:
        return client

    matches = [c.id for c in client_service.list_clients() if c.client_name == client]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise ValueError(f"Several clients are named '{client}'; use the client ID")
    raise ValueError(f"Client '{client}' not found")


def resolve_id_prefix(ids: Iterable[str], value: str, kind: str) -> str:
    """Resolve a full ID or a unique leading part of one.

    Args:
        ids: Known IDs
        value: Full ID or prefix of at least four characters
        kind: Noun for error messages ("job", "payment record")

    Raises:
        ValueError: If nothing or more than one ID matches
    """
    value = value.strip().lower()
    known = list(ids)
    if value in known:
        return value
    if len(value) < MIN_PREFIX:
        raise ValueError(f"{kind.capitalize()} '{value}' not found")

    matches = [i for i in known if i.startswith(value)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise ValueError(f"'{value}' matches {len(matches)} {kind}s; type more characters")
    raise ValueError(f"{kind.capitalize()} '{value}' not found")
