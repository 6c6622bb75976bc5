import logging, time
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, model_validator
from typing import Optional
import config
from deps.db import get_store
from services.plinko import plinko_outcome
from services.seeds import SeedRegistry, get_registry, now_ms
from services.verify import RoundRecord

router = APIRouter(prefix="/plinko", tags=["plinko"])
logger = logging.getLogger(__name__)


def _now_nonce() -> str:
    return str(int(time.time() * 1000))


class PlayIn(BaseModel):
    client_seed: str = Field(min_length=1)
    nonce: str = Field(default_factory=_now_nonce)
    rows: int = Field(default=config.DEFAULT_ROWS, ge=1, le=config.MAX_ROWS)
    start_slot: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def start_within_rows(self):
        if self.start_slot is not None and self.start_slot > self.rows:
            raise ValueError(f"start_slot must be in [0, {self.rows}]")
        return self


class StepOut(BaseModel):
    row: int
    slot: int


class PlayOut(BaseModel):
    round_id: int
    commit: str
    server_seed: Optional[str]
    client_seed: str
    nonce: str
    rows: int
    start_slot: int
    result_slot: int
    path: list[StepOut]


@router.get("/commit")
def get_commit(reg: SeedRegistry = Depends(get_registry)):
    return reg.current().public()


@router.post("/play", response_model=PlayOut)
def play(p: PlayIn, reg: SeedRegistry = Depends(get_registry), store=Depends(get_store)):
    epoch = reg.current()
    out = plinko_outcome(epoch.server_seed, p.client_seed, p.nonce,
                         rows=p.rows, start_slot=p.start_slot)

    record = RoundRecord(
        commit=epoch.commit, server_seed=epoch.server_seed,
        client_seed=p.client_seed, nonce=p.nonce, rows=out.rows,
        start_slot=out.start_slot, result_slot=out.result_slot, timestamp=now_ms(),
    )
    round_id = store.add(record)
    logger.info("round %s played, commit=%s slot=%s", round_id, epoch.commit, out.result_slot)

    revealed = None
    if config.REVEAL_MODE == "rotate":
        reg.retire(epoch)
        revealed = epoch.server_seed

    return PlayOut(
        round_id=round_id, commit=epoch.commit, server_seed=revealed,
        client_seed=p.client_seed, nonce=p.nonce, rows=out.rows,
        start_slot=out.start_slot, result_slot=out.result_slot,
        path=[StepOut(row=s.row, slot=s.slot) for s in out.path],
    )
