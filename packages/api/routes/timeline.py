"""Timeline layout endpoint routes."""

from fastapi import APIRouter, Depends

from ..dependencies import get_timeline_service
from ..schemas import LayoutRequest, LayoutResponse
from ..services import TimelineService


router = APIRouter(prefix="/api/timeline", tags=["timeline"])


@router.post(
    "/layout",
    response_model=LayoutResponse,
    summary="Snap an overlay draft",
)
async def layout_overlay(
    body: LayoutRequest,
    timeline_service: TimelineService = Depends(get_timeline_service),
):
    """
    Snap an overlay range to clip boundaries and compute its pixel placement.

    Both edges snap independently; the start is then clamped so the range
    fits the timeline. With `commit` the range is settled on whole clips.
    """
    result = timeline_service.layout(
        clips=[clip.to_clip() for clip in body.clips],
        start=body.start,
        duration=body.duration,
        clip_width_px=body.clip_width_px,
        gap_px=body.gap_px,
        threshold=body.threshold,
        commit=body.commit,
    )
    return LayoutResponse(**result)
