from __future__ import annotations

import logging

from medroute.models import UserContext

logger = logging.getLogger(__name__)

SCALAR_FIELDS = ("name", "age", "location", "profession")


def merge_context(current: UserContext, incoming: UserContext | dict) -> None:
    """Merge newly extracted facts into ``current`` in place.

    Scalars are replaced only by non-empty values, interests only grow
    (first-seen order, no duplicates) and favorites are written only for
    non-empty values. Nothing is ever removed.
    """
    if isinstance(incoming, UserContext):
        incoming = incoming.model_dump(exclude_none=True)

    for field_name in SCALAR_FIELDS:
        value = incoming.get(field_name)
        if value:
            setattr(current, field_name, value)

    for interest in incoming.get("interests") or []:
        if interest and interest not in current.interests:
            current.interests.append(interest)

    for key, value in (incoming.get("favorites") or {}).items():
        if value:
            current.favorites[key] = value

    if incoming:
        logger.debug("Context merged: %s", sorted(incoming))


def reset_context(context: UserContext) -> None:
    for field_name in SCALAR_FIELDS:
        setattr(context, field_name, None)
    context.interests.clear()
    context.favorites.clear()
