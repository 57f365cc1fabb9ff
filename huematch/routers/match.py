"""/api/match — closest named colors for a hex query."""
from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import APIRouter, HTTPException

from ..models.match import (
    MAX_LIMIT,
    ColorSetSchema,
    MatchRequest,
    MatchResponse,
    MatchResultSchema,
    NormalizeResponse,
)
from ..services import color_sets, color_space, matcher

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


def read_default_limit(raw: Optional[str]) -> int:
    """Parse HUEMATCH_DEFAULT_LIMIT, clamped to the bounds MatchRequest.limit accepts."""
    if raw is None or not raw.strip():
        return matcher.DEFAULT_LIMIT
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer HUEMATCH_DEFAULT_LIMIT={raw!r}")
        return matcher.DEFAULT_LIMIT
    return min(max(value, 0), MAX_LIMIT)


DEFAULT_LIMIT = read_default_limit(os.environ.get("HUEMATCH_DEFAULT_LIMIT"))


@router.get("/color-sets")
async def list_color_sets() -> list[ColorSetSchema]:
    return [
        ColorSetSchema(id=cs.id, label=cs.label, count=cs.count)
        for cs in color_sets.available_color_sets()
    ]


@router.post("/match")
async def match_color(req: MatchRequest) -> MatchResponse:
    """
    Rank the chosen color set against ``req.hex``.

    A hex the user is still typing is not an error: it yields 200 with no results.
    """
    try:
        color_set = color_sets.get_color_set(req.color_set)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e.args[0]))

    limit = req.limit if "limit" in req.model_fields_set else DEFAULT_LIMIT
    results = matcher.find_closest_colors(req.hex, color_set.colors, limit)

    return MatchResponse(
        query=req.hex,
        normalized=color_space.normalize_hex(req.hex),
        color_set=color_set.id,
        results=[MatchResultSchema(**r.to_dict()) for r in results],
    )


@router.get("/normalize")
async def normalize(hex: str) -> NormalizeResponse:
    normalized = color_space.normalize_hex(hex)
    lab = color_space.hex_to_lab(normalized) if normalized else None
    return NormalizeResponse(
        input=hex,
        normalized=normalized,
        valid=normalized is not None,
        lab=list(lab) if lab is not None else None,
    )
