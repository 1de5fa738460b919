"""POST /api/match — template search."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, HTTPException

from graylab.models.requests import MatchRequest
from graylab.models.responses import MatchResponse
from graylab.pnm.parser import parse_pnm
from graylab.utils.matching import match_nearest, match_similarity

router = APIRouter()

_MATCHERS = {
    "nearest": match_nearest,
    "similarity": match_similarity,
}


@router.post("/match", response_model=MatchResponse)
async def match(req: MatchRequest) -> MatchResponse:
    try:
        target = parse_pnm(req.target)
        template = parse_pnm(req.template)
        offset, score = await asyncio.get_running_loop().run_in_executor(
            None, _MATCHERS[req.method], target, template
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return MatchResponse(method=req.method, row=offset.row, col=offset.col, score=score)
