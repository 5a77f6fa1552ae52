"""Ownership Guard — only a resource's recorded creator may mutate or delete it.

Invariants:
    - Identifiers compared as opaque strings (str(UUID) == token userId)
    - A raw id, an expanded object with .id, a CreatorRef or a mapping with
      "id"/"_id" all normalize to the same string before comparison
    - Mismatch (including an absent acting user) raises ForbiddenError (403)
"""

from collections.abc import Mapping

from app.core.domain_types import CreatorRef
from app.core.errors import ForbiddenError


def creator_id_of(reference: object) -> str:
    """Normalize any creator reference shape to its string identifier."""
    if isinstance(reference, CreatorRef):
        return reference.id
    if isinstance(reference, Mapping):
        value = reference.get("id", reference.get("_id"))
        if value is None:
            raise ValueError("creator mapping has no id")
        return str(value)
    expanded_id = getattr(reference, "id", None)
    if expanded_id is not None:
        return str(expanded_id)
    if reference is None:
        raise ValueError("creator reference is empty")
    return str(reference)


def assert_owner(resource_owner: object, acting_user_id: str | None) -> None:
    """Raise ForbiddenError unless acting_user_id owns the resource."""
    if acting_user_id is None:
        raise ForbiddenError("User not authorized to change this post.")
    if creator_id_of(resource_owner) != str(acting_user_id):
        raise ForbiddenError("User not authorized to change this post.")
