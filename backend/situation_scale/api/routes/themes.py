"""Theme Routes — built-in prompt catalogue keys."""

from fastapi import APIRouter

from situation_scale.core.themes import list_themes
from situation_scale.schemas.game import ThemesResponse

router = APIRouter(prefix="/api/v1/themes", tags=["themes"])


@router.get("", response_model=ThemesResponse)
async def get_themes():
    return ThemesResponse(themes=list_themes())
