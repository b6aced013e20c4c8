"""Status Picker — per-request pseudo-random choice between success and error codes.

Invariants:
    - Every pick is independent: no counters, no state carried between requests
    - With probability error_percentage/100 one of error_codes is chosen uniformly,
      otherwise success_code
    - error_percentage is bounded 0–100; error_codes is never empty

Design Decisions:
    - Random source injectable: tests pin a seeded random.Random, production uses
      its own OS-seeded generator
"""

import random
from dataclasses import dataclass, field


DEFAULT_ERROR_CODES = (400, 401, 403, 408, 409, 500, 502, 503, 504)


@dataclass(frozen=True)
class StatusPicker:
    """Chooses the status for /errors and for routes flagged error=true."""
    error_percentage: int = 50
    error_codes: tuple[int, ...] = DEFAULT_ERROR_CODES
    success_code: int = 200
    rng: random.Random = field(
        default_factory=random.Random, compare=False, repr=False,
    )

    def __post_init__(self):
        if not 0 <= self.error_percentage <= 100:
            raise ValueError(
                f"error_percentage must be 0-100, got {self.error_percentage}",
            )
        if not self.error_codes:
            raise ValueError("error_codes must not be empty")

    @property
    def candidates(self) -> tuple[int, ...]:
        """Every code a pick can return."""
        return (self.success_code, *self.error_codes)

    def pick(self) -> int:
        if self.rng.randrange(100) < self.error_percentage:
            return self.rng.choice(self.error_codes)
        return self.success_code
