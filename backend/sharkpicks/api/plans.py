from fastapi import APIRouter
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/plans", tags=["plans"])


# Plans are served by the external data store; this API only answers the lookup miss.
@router.get("/{plan_id}")
async def get_plan(plan_id: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": "Plan not found"})
