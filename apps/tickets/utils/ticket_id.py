"""
Ticket identifiers.

Format: ``TKT-{epoch milliseconds}-{9 uppercase base-36 characters}``,
e.g. ``TKT-1704067890123-K3J9QZ0AB``. Registration.ticket_id carries a unique
index; the issuer regenerates on collision.
"""

import re
import secrets
import string
import time

TICKET_ID_PREFIX = 'TKT'
SUFFIX_LENGTH = 9
SUFFIX_ALPHABET = string.digits + string.ascii_uppercase

TICKET_ID_PATTERN = re.compile(r'^TKT-\d{13,}-[0-9A-Z]{9}$')


def generate_ticket_id() -> str:
    millis = int(time.time() * 1000)
    suffix = ''.join(secrets.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f'{TICKET_ID_PREFIX}-{millis}-{suffix}'


def parse_ticket_payload(raw) -> str | None:
    """
    Turn scanned or typed text into a lookup key.

    Returns None for non-strings and for text that is empty after trimming.
    Anything else is returned trimmed; whether it names a ticket is for the
    lookup to decide, so legacy ids in other formats still resolve.
    """
    if not isinstance(raw, str):
        return None
    value = raw.strip()
    return value or None


def looks_like_ticket_id(value: str) -> bool:
    return bool(TICKET_ID_PATTERN.match(value or ''))
