"""Resolution of caller-supplied staff identifiers to canonical internal ids.

Staff references reach us in two schemes: the identity provider's user id
(e.g. ``user_2f8...``) or our own internal UUID. Everything stored on a
question paper, and every ownership comparison, uses the internal id.
"""

import logging
from uuid import UUID

from examcell.domain.auth.model.value import StaffId, StaffMember
from examcell.domain.auth.port.directory import StaffDirectory
from examcell.domain.shared.error import IdentityResolutionError

logger = logging.getLogger(__name__)


def _as_internal_id(raw: str) -> StaffId | None:
    try:
        return StaffId(UUID(raw))
    except ValueError:
        return None


async def resolve_staff(
    raw: str | StaffId,
    directory: StaffDirectory,
    *,
    field: str | None = None,
) -> StaffMember:
    """Resolve an internal or external identifier to an active staff record.

    Raises:
        IdentityResolutionError: If no active staff member matches.
    """
    if isinstance(raw, StaffId):
        candidate: StaffId | None = raw
        text = str(raw)
    else:
        text = raw.strip()
        if not text:
            raise IdentityResolutionError("Staff identifier is empty", field=field)
        candidate = _as_internal_id(text)

    member: StaffMember | None = None
    if candidate is not None:
        member = await directory.get(candidate)
    if member is None:
        member = await directory.find_by_external_id(text)

    if member is None or not member.is_active:
        logger.warning("Identity resolution failed: identifier=%s", text)
        raise IdentityResolutionError(f"No staff member matches identifier '{text}'", field=field)

    return member


async def resolve_internal_id(
    raw: str | StaffId,
    directory: StaffDirectory,
    *,
    field: str | None = None,
) -> StaffId:
    """Resolve any staff identifier to its canonical internal id."""
    member = await resolve_staff(raw, directory, field=field)
    return member.id
