"""
Splat dataset API routes.
"""
from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Query, Request, Response

router = APIRouter()


def _get_decode_service(request: Request):
    return request.app.state.container.splat_decode_service()


@router.get("")
async def list_datasets(request: Request):
    service = _get_decode_service(request)
    return {
        "datasets": service.datasets(),
        "default": request.app.state.container.settings.splat.default_dataset,
    }


@router.get("/{name}/groups")
async def group_layout(name: str, request: Request):
    """Return the group -> frame span layout of a dataset."""
    service = _get_decode_service(request)
    return {"dataset": name, **service.layout(name).to_dict()}


@router.get("/{name}/groups/{group_index}")
async def group_streams(name: str, group_index: int, request: Request):
    """Decode the streams of one group and report their frame counts."""
    service = _get_decode_service(request)
    span = service.layout(name).span_for(group_index)
    streams = await service.decode_streams(name, group_index)
    return {
        "dataset": name,
        "group_index": group_index,
        "start_frame": span.start_frame,
        "end_frame": span.end_frame,
        "streams": [
            {"url": url, "frames": len(frames)}
            for url, frames in zip(service.stream_urls(name, group_index), streams)
        ],
    }


@router.get("/{name}/frames/{frame_index}")
async def decode_frame(
    name: str,
    frame_index: int,
    request: Request,
    format: Literal["json", "npz"] = Query("json"),
):
    """Decode one frame; ``format=npz`` returns the planes as an archive."""
    service = _get_decode_service(request)
    frame = await service.decode_frame(name, frame_index)

    if format == "npz":
        return Response(
            content=service.encode_frame(frame),
            media_type="application/octet-stream",
            headers={
                "content-disposition": f'attachment; filename="{name}_frame_{frame_index:06d}.npz"'
            },
        )
    return frame.summary()


@router.post("/{name}/frames/{frame_index}/export")
async def export_frame(name: str, frame_index: int, request: Request):
    """Decode one frame and store it under the exports directory."""
    service = _get_decode_service(request)
    path = await service.export_frame(name, frame_index)
    return {"dataset": name, "frame_index": frame_index, "path": path}
