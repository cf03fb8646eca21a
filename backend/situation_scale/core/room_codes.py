"""Room Codes — short shareable identifiers for games.

Invariants:
    - Codes are ROOM_CODE_LENGTH characters from [A-Z0-9]
    - normalize_room_code is applied to every code received from a client
"""

import random
import string

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits
ROOM_CODE_LENGTH = 6


def generate_room_code(
    rng: random.Random | None = None, length: int = ROOM_CODE_LENGTH,
) -> str:
    rng = rng or random.SystemRandom()
    return "".join(rng.choice(ROOM_CODE_ALPHABET) for _ in range(length))


def normalize_room_code(room_code: str) -> str:
    return room_code.strip().upper()
