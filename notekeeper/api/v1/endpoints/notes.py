"""
Notes API Endpoints.

REST endpoints for the authenticated actor's notes. Every route
requires a bearer token and counts against the actor's rate limit.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, Request

from notekeeper.core.dependencies import (
    CurrentActor,
    DbSession,
    RequestId,
    enforce_rate_limit,
)
from notekeeper.core.pagination import create_paginated_response, get_page_param
from notekeeper.schemas.base import ApiResponse, ResponseMetadata
from notekeeper.schemas.note import ArchivedFilter, NoteCreate, NoteResponse, NoteUpdate
from notekeeper.services.note import NoteService

router = APIRouter(dependencies=[Depends(enforce_rate_limit)])


@router.get(
    "",
    summary="List notes (paginated)",
    description="Get a page of the caller's notes, newest first. Active notes only unless `archived` is given.",
)
async def list_notes(
    request: Request,
    actor: CurrentActor,
    db: DbSession,
    request_id: RequestId,
    archived: str | None = Query(
        default=None,
        description="0 for active notes (default), 1 for archived notes, all for both",
    ),
    search: str | None = Query(
        default=None,
        description="Case-insensitive text to find in title or body",
    ),
    page: int = Depends(get_page_param),
) -> dict[str, Any]:
    """List the caller's notes."""
    service = NoteService(db)
    result = await service.list_notes(
        actor,
        archived=ArchivedFilter.from_param(archived),
        search=search,
        page=page,
    )
    return create_paginated_response(
        url=request.url,
        result=result,
        item_schema=NoteResponse,
        request_id=request_id,
    )


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create a new note with a title and optional body.",
)
async def create_note(
    data: NoteCreate,
    actor: CurrentActor,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    service = NoteService(db)
    note = await service.create_note(actor, data)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.patch(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Update an existing note. Only provided fields are updated.",
)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    actor: CurrentActor,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    service = NoteService(db)
    note = await service.update_note(actor, note_id, data)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/{note_id}/archive",
    response_model=ApiResponse[NoteResponse],
    summary="Archive a note",
    description="Archive a note. Archiving an archived note succeeds without changes.",
)
async def archive_note(
    note_id: str,
    actor: CurrentActor,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Archive a note."""
    service = NoteService(db)
    note = await service.archive_note(actor, note_id)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )
