import hmac, logging
from dataclasses import asdict, dataclass
from typing import Optional
from services.rng import commit
from services.plinko import plinko_outcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundRecord:
    commit: str
    server_seed: Optional[str]
    client_seed: str
    nonce: str
    rows: int
    start_slot: int
    result_slot: int
    timestamp: int = 0
    round_id: Optional[int] = None

    @classmethod
    def from_row(cls, row) -> "RoundRecord":
        # column order of SqlRoundStore.SELECT_SQL
        rid, c, seed, client, nonce, rows, start, result, ts = row
        return cls(commit=c, server_seed=seed, client_seed=client, nonce=str(nonce),
                   rows=int(rows), start_slot=int(start), result_slot=int(result),
                   timestamp=int(ts), round_id=int(rid))

    def as_dict(self) -> dict:
        return asdict(self)


def verify_commitment(server_seed: str, published_commit: str) -> bool:
    try:
        expected = commit(server_seed).encode()
    except UnicodeEncodeError:
        # e.g. a lone surrogate, no UTF-8 text can have committed to it
        return False
    published = (published_commit or "").strip().lower().encode("ascii", "replace")
    return hmac.compare_digest(expected, published)


def verify_round(record: RoundRecord) -> bool:
    """Commitment check plus a full replay of the stored round."""
    if not record.server_seed or not verify_commitment(record.server_seed, record.commit):
        logger.info("round %s: commitment mismatch", record.round_id)
        return False
    try:
        out = plinko_outcome(record.server_seed, record.client_seed, record.nonce,
                             rows=record.rows, start_slot=record.start_slot)
    except ValueError as e:
        logger.info("round %s: cannot replay (%s)", record.round_id, e)
        return False
    if out.result_slot != record.result_slot:
        logger.info("round %s: replayed slot %s != stored %s",
                    record.round_id, out.result_slot, record.result_slot)
        return False
    return True
