from fastapi import APIRouter

from profind.schemas.search import PlanSlotsResponse
from profind.services.tiering import get_slot_limit, parse_plan_tier

router = APIRouter(tags=["Plans"])


@router.get("/plans/{plan_id}/slots", response_model=PlanSlotsResponse)
def plan_slots(plan_id: str) -> PlanSlotsResponse:
    """Boosted listing slots for a plan id or tier name (unknown ids count as free)."""
    tier = parse_plan_tier(plan_id)
    return PlanSlotsResponse(plan_tier=tier, slot_limit=get_slot_limit(tier))
