"""Participant id normalisation."""

from __future__ import annotations

import re

from .errors import InvalidParticipant

MAX_PARTICIPANT_ID_LENGTH = 64

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def normalize_participant_id(raw: object) -> str:
    """Return the canonical form of ``raw`` or raise :class:`InvalidParticipant`.

    Account addresses are case-insensitive, so anything shaped like one is
    lower-cased; every other id is kept verbatim after stripping whitespace.
    """

    if not isinstance(raw, str):
        raise InvalidParticipant(raw, "Participant id must be a string")
    value = raw.strip()
    if not value:
        raise InvalidParticipant(raw, "Participant id is required")
    if len(value) > MAX_PARTICIPANT_ID_LENGTH:
        raise InvalidParticipant(
            raw,
            f"Participant id must be {MAX_PARTICIPANT_ID_LENGTH} characters or less",
        )
    if _ADDRESS_RE.match(value):
        return value.lower()
    return value


__all__ = ["MAX_PARTICIPANT_ID_LENGTH", "normalize_participant_id"]
