"""Render job endpoint routes."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse, StreamingResponse

from packages.core import ArtifactNotFoundError, InputError, JobNotFoundError

from ..dependencies import get_render_service
from ..schemas import (
    ErrorResponse,
    JobResponse,
    RenderAcceptedResponse,
    RenderRequestBody,
    RenderStatsResponse,
)
from ..services import RenderService

router = APIRouter(prefix="/api", tags=["render"])


@router.post(
    "/render",
    status_code=202,
    response_model=RenderAcceptedResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid timeline"},
    },
    summary="Start a render",
)
async def start_render(
    body: RenderRequestBody,
    render_service: RenderService = Depends(get_render_service),
):
    """
    Queue a timeline for rendering.

    Returns immediately with the job id; follow progress on
    `/api/render-progress/{jobId}` and fetch the video from
    `/api/download/{jobId}` once it succeeds.
    """
    try:
        job_id = render_service.submit(body.to_request())
    except InputError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())

    return RenderAcceptedResponse(job_id=job_id)


@router.get(
    "/render/{job_id}",
    response_model=JobResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Job not found"},
    },
    summary="Get render job status",
)
async def get_render_job(
    job_id: str,
    render_service: RenderService = Depends(get_render_service),
):
    """Get the current status and progress of a render job."""
    try:
        job = render_service.get_job(job_id)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.to_dict())

    return JobResponse.from_job(job)


@router.get(
    "/render-progress/{job_id}",
    responses={
        200: {"content": {"text/event-stream": {}}, "description": "Progress events"},
        404: {"model": ErrorResponse, "description": "Job not found"},
    },
    summary="Stream render progress",
)
async def stream_render_progress(
    job_id: str,
    render_service: RenderService = Depends(get_render_service),
):
    """
    Stream progress as server-sent events.

    Each event is `data: {"progress": int, "done": bool, "error"?: str}`.
    The stream ends after the first event with `done` set.
    """
    try:
        subscription = render_service.subscribe(job_id)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.to_dict())

    async def event_stream():
        try:
            async for event in subscription.events():
                yield event.to_sse()
        finally:
            # Also reached when the client disconnects mid-stream
            subscription.close()

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.get(
    "/download/{job_id}",
    responses={
        200: {"content": {"video/mp4": {}}, "description": "Rendered video"},
        404: {"model": ErrorResponse, "description": "Video not available"},
    },
    summary="Download rendered video",
)
async def download_video(
    job_id: str,
    render_service: RenderService = Depends(get_render_service),
):
    """Download the MP4 of a succeeded render job."""
    try:
        path = render_service.artifact_path(job_id)
    except (JobNotFoundError, ArtifactNotFoundError) as e:
        raise HTTPException(status_code=404, detail=e.to_dict())

    return FileResponse(
        path=path,
        media_type="video/mp4",
        filename=path.name,
    )


@router.get(
    "/render",
    response_model=RenderStatsResponse,
    summary="Get render job stats",
)
async def get_render_stats(
    render_service: RenderService = Depends(get_render_service),
):
    """Get statistics about the in-memory job table."""
    return RenderStatsResponse(**render_service.get_stats())
