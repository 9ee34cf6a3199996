from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from movesbook.db.async_session import get_async_db
from movesbook.models.defaults import DefaultsKind
from movesbook.schemas.defaults import (
    AllDefaultsResponse,
    DefaultsLoadResponse,
    DefaultsSaveRequest,
    DefaultsSaveResponse,
)
from movesbook.services.async_defaults import DefaultsService
from movesbook.services.errors import NotFound

router = APIRouter()


@router.get("", response_model=AllDefaultsResponse)
async def load_all_defaults(
    language: Optional[str] = Query(None, description="Language code, e.g. 'en'"),
    db: AsyncSession = Depends(get_async_db)
) -> Any:
    """Colors, favourites and tools for one language; kinds never saved come back as null."""
    defaults = await DefaultsService.load_all(db, language)
    return AllDefaultsResponse(language=language, defaults=defaults)


@router.get("/{kind}", response_model=DefaultsLoadResponse)
async def load_defaults(
    kind: DefaultsKind,
    language: Optional[str] = Query(None, description="Language code, e.g. 'en'"),
    db: AsyncSession = Depends(get_async_db)
) -> Any:
    data = await DefaultsService.load(db, kind, language)
    if data is None:
        raise NotFound("No defaults found for this language")
    return DefaultsLoadResponse(data=data, language=language)


@router.post("/{kind}", response_model=DefaultsSaveResponse)
async def save_defaults(
    kind: DefaultsKind,
    save_data: DefaultsSaveRequest,
    db: AsyncSession = Depends(get_async_db)
) -> Any:
    """
    Create or replace the defaults of one kind for a language.
    Requires the super admin password in the body.
    """
    message = await DefaultsService.save(
        db,
        kind,
        language=save_data.language,
        data=save_data.data,
        password=save_data.password,
    )
    return DefaultsSaveResponse(message=message)
