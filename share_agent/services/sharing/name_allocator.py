"""Unique display-name allocation for new shares."""

import posixpath
from typing import Iterable

from ...core.exceptions import ShareNameGenerationError
from ...models import ShareRecord

MAX_NAME_ATTEMPTS = 10
FALLBACK_BASE_NAME = "Share"


def base_name_for_path(virtual_path: str) -> str:
    """Last component of a virtual path ("/Home/Photos/" -> "Photos")."""
    return posixpath.basename(virtual_path.rstrip("/")) or FALLBACK_BASE_NAME


def allocate_share_name(base_name: str, shares: Iterable[ShareRecord]) -> str:
    """
    Return `base_name`, or "<base_name> (N)" for the first free N in 2..10.

    Must be called with the snapshot read inside the registry's write lock.
    """
    taken = {share.name for share in shares}

    name = base_name
    attempt = 1
    while name in taken:
        attempt += 1
        if attempt > MAX_NAME_ATTEMPTS:
            raise ShareNameGenerationError(f"No free name for '{base_name}'")
        name = f"{base_name} ({attempt})"

    return name
