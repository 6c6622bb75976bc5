from fastapi import APIRouter, Depends, HTTPException
import config
from deps.db import get_store
from services.seeds import SeedRegistry, get_registry
from services.verify import verify_commitment, verify_round

router = APIRouter(prefix="/rounds", tags=["rounds"])


def _load(round_id: int, store):
    record = store.get(round_id)
    if record is None:
        raise HTTPException(404, "Round not found")
    return record


@router.get("/{round_id}")
def get_round(round_id: int, reg: SeedRegistry = Depends(get_registry), store=Depends(get_store)):
    data = _load(round_id, store).as_dict()
    # deferred reveal: the seed stays hidden while it still backs new rounds
    if config.REVEAL_MODE == "deferred" and reg.is_active(data["commit"]):
        data["server_seed"] = None
    return data


@router.get("/{round_id}/verify")
def verify_stored_round(round_id: int, full: bool = True, store=Depends(get_store)):
    record = _load(round_id, store)
    if full:
        ok = verify_round(record)
    else:
        ok = bool(record.server_seed) and verify_commitment(record.server_seed, record.commit)
    return {"round_id": round_id, "mode": "full" if full else "commit", "ok": ok}
