from datetime import datetime
from fastapi import APIRouter

router = APIRouter(prefix="/api/health", tags=["health"])

@router.get("")
def health():
    # Check si l'API est up
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat() + "Z"}
