from fastapi import APIRouter, Depends
from services.seeds import SeedRegistry, get_registry

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/seed/rotate")
def rotate_seed(reg: SeedRegistry = Depends(get_registry)):
    retired, active = reg.rotate()
    return {
        "retired": {"commit": retired.commit, "server_seed": retired.server_seed,
                    "commit_time": retired.commit_time},
        "active": active.public(),
    }
