from fastapi import APIRouter
from pydantic import BaseModel, Field
from services.verify import RoundRecord, verify_commitment, verify_round

router = APIRouter(prefix="/verify", tags=["verify"])


class CommitIn(BaseModel):
    server_seed: str
    commit: str


class RoundIn(BaseModel):
    commit: str
    server_seed: str
    client_seed: str
    nonce: str
    rows: int
    start_slot: int
    result_slot: int
    timestamp: int = Field(default=0, ge=0)


@router.post("/commit")
def check_commit(c: CommitIn):
    return {"ok": verify_commitment(c.server_seed, c.commit)}


@router.post("/round")
def check_round(r: RoundIn):
    return {"ok": verify_round(RoundRecord(**r.model_dump()))}
