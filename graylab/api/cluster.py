"""POST /api/cluster — k-means over scalar values."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, HTTPException

from graylab.models.requests import ClusterRequest
from graylab.models.responses import ClusterResponse
from graylab.utils.kmeans import Feature, cluster

router = APIRouter()


@router.post("/cluster", response_model=ClusterResponse)
async def cluster_values(req: ClusterRequest) -> ClusterResponse:
    features = [Feature(v) for v in req.values]
    try:
        centres = await asyncio.get_running_loop().run_in_executor(
            None, cluster, features, req.k, req.max_iterations
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return ClusterResponse(assignments=[f.cluster for f in features], centres=centres)
