from fastapi import APIRouter

ROUTER_TAG = "internal"
INCLUDE_ROUTER_IN_SCHEMA = False

router = APIRouter()


@router.get("/ping")
async def ping():
    return {"status": "ok"}
