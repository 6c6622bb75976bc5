from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence
from services.rng import derive_bits


class Step(NamedTuple):
    row: int
    slot: int


@dataclass(frozen=True)
class Outcome:
    rows: int
    start_slot: int
    result_slot: int
    path: list[Step]


def default_start(rows: int) -> int:
    return (rows + 1) // 2


def simulate(rows: int, start_slot: Optional[int], bits: Sequence[int]) -> list[Step]:
    """
    Drop a ball through `rows` rows of pegs.

    Bit r decides row r: 1 moves right, 0 moves left, clamped to [0, rows].
    The first step is the start position under row -1, so the result has
    rows + 1 entries and the last slot is the outcome.
    Raises ValueError on a bad row count or start slot, or when fewer bits
    than rows are supplied.
    """
    if isinstance(rows, bool) or not isinstance(rows, int) or rows < 1:
        raise ValueError("rows must be a positive integer")
    slot = default_start(rows) if start_slot is None else start_slot
    if not 0 <= slot <= rows:
        raise ValueError(f"start_slot must be in [0, {rows}]")
    if len(bits) < rows:
        raise ValueError(f"need {rows} bits, got {len(bits)}")

    path = [Step(-1, slot)]
    for r in range(rows):
        if bits[r] == 1:
            slot = min(slot + 1, rows)
        else:
            slot = max(slot - 1, 0)
        path.append(Step(r, slot))
    return path


def plinko_outcome(server_seed: str, client_seed: str, nonce: str,
                   rows: int = 12, start_slot: Optional[int] = None) -> Outcome:
    bits = derive_bits(server_seed, client_seed, nonce, rows)
    path = simulate(rows, start_slot, bits)
    return Outcome(rows=rows, start_slot=path[0].slot, result_slot=path[-1].slot, path=path)
