"""Intents API — CRUD plus scope linking, exclusion and visibility listing.

Routes resolve the IntentService from app.state, which the server
lifespan (or a test) populates.
"""
import logging
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, Query, Request

from core.exceptions import ValidationError
from intents.scope import ScopeId, ScopeKind
from intents.service import IntentService
from schemas.intent import (
    CreateDefaultIntentRequest,
    CreateIntentRequest,
    IntentListResponse,
    IntentResponse,
    MessageResponse,
    ScopeBindingRequest,
    ScopeListResponse,
    UpdateIntentRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/intents", tags=["intents"])


def get_intent_service(request: Request) -> IntentService:
    return request.app.state.intent_service


def _resolve_scope(tenant_id: Optional[str], client_id: Optional[str]) -> ScopeId:
    if bool(tenant_id) == bool(client_id):
        raise ValidationError("Exactly one of tenant_id or client_id is required")
    if tenant_id:
        return ScopeId.tenant(tenant_id)
    return ScopeId.client(client_id)


def _resolve_scope_ids(
    tenant_ids: Optional[List[str]], client_ids: Optional[List[str]]
) -> Tuple[Optional[List[str]], ScopeKind]:
    if tenant_ids and client_ids:
        raise ValidationError("Give tenant_ids or client_ids, not both")
    # An explicit client list wins; an empty one only counts when tenant_ids is absent
    if client_ids or (client_ids is not None and tenant_ids is None):
        return client_ids, ScopeKind.CLIENT
    return tenant_ids, ScopeKind.TENANT


# ---- Create ----

@router.post("/default", response_model=IntentResponse, status_code=201)
async def create_default_intent(
    req: CreateDefaultIntentRequest,
    service: IntentService = Depends(get_intent_service),
):
    intent = await service.create_default_intent(
        req.label, req.description, req.status, req.synonyms, req.example_phrases
    )
    return IntentResponse.from_intent(intent)


@router.post("", response_model=IntentResponse, status_code=201)
async def create_intent(
    req: CreateIntentRequest,
    service: IntentService = Depends(get_intent_service),
):
    scope_ids, kind = _resolve_scope_ids(req.tenant_ids, req.client_ids)
    intent = await service.create_intent(
        req.label,
        req.description,
        req.status,
        req.synonyms,
        req.example_phrases,
        is_default=req.is_default,
        scope_ids=scope_ids,
        kind=kind,
    )
    return IntentResponse.from_intent(intent)


# ---- List ----

@router.get("/all", response_model=IntentListResponse)
async def list_all_intents(service: IntentService = Depends(get_intent_service)):
    return IntentListResponse.from_intents(await service.list_all_intents())


@router.get("/default", response_model=IntentListResponse)
async def list_default_intents(service: IntentService = Depends(get_intent_service)):
    return IntentListResponse.from_intents(await service.list_default_intents())


@router.get("", response_model=IntentListResponse)
async def list_intents_for_scope(
    tenant_id: Optional[str] = Query(default=None),
    client_id: Optional[str] = Query(default=None),
    service: IntentService = Depends(get_intent_service),
):
    """Intents visible to one tenant or client."""
    scope = _resolve_scope(tenant_id, client_id)
    return IntentListResponse.from_intents(await service.list_intents_for_scope(scope))


# ---- Single intent ----

@router.get("/{intent_id}", response_model=IntentResponse)
async def get_intent(intent_id: str, service: IntentService = Depends(get_intent_service)):
    return IntentResponse.from_intent(await service.get_intent(intent_id))


@router.put("/{intent_id}", response_model=IntentResponse)
async def update_intent(
    intent_id: str,
    req: UpdateIntentRequest,
    service: IntentService = Depends(get_intent_service),
):
    scope_ids, kind = _resolve_scope_ids(req.tenant_ids, req.client_ids)
    intent = await service.update_intent(
        intent_id,
        label=req.label,
        description=req.description,
        status=req.status,
        synonyms=req.synonyms,
        example_phrases=req.example_phrases,
        scope_ids=scope_ids,
        kind=kind,
    )
    return IntentResponse.from_intent(intent)


@router.delete("/{intent_id}", response_model=MessageResponse)
async def delete_intent(intent_id: str, service: IntentService = Depends(get_intent_service)):
    await service.delete_intent(intent_id)
    return MessageResponse(message="Intent deleted successfully")


# ---- Scope relationships ----

@router.post("/{intent_id}/link", response_model=MessageResponse)
async def link_intent(
    intent_id: str,
    req: ScopeBindingRequest,
    service: IntentService = Depends(get_intent_service),
):
    scope = _resolve_scope(req.tenant_id, req.client_id)
    await service.link_intent_to_scope(intent_id, scope)
    return MessageResponse(message=f"Intent linked to {scope.kind.value} successfully")


@router.post("/{intent_id}/unlink", response_model=MessageResponse)
async def unlink_intent(
    intent_id: str,
    req: ScopeBindingRequest,
    service: IntentService = Depends(get_intent_service),
):
    scope = _resolve_scope(req.tenant_id, req.client_id)
    await service.unlink_intent_from_scope(intent_id, scope)
    return MessageResponse(message=f"Intent unlinked from {scope.kind.value} successfully")


@router.post("/{intent_id}/exclude", response_model=MessageResponse)
async def exclude_intent(
    intent_id: str,
    req: ScopeBindingRequest,
    service: IntentService = Depends(get_intent_service),
):
    scope = _resolve_scope(req.tenant_id, req.client_id)
    await service.exclude_intent_from_scope(intent_id, scope)
    return MessageResponse(message=f"Intent excluded from {scope.kind.value} successfully")


@router.get("/{intent_id}/scopes", response_model=ScopeListResponse)
async def list_intent_scopes(
    intent_id: str,
    kind: ScopeKind = Query(default=ScopeKind.TENANT),
    service: IntentService = Depends(get_intent_service),
):
    scopes = await service.scopes_for_intent(intent_id, kind)
    return ScopeListResponse(intent_id=intent_id, kind=kind, scope_ids=[s.value for s in scopes])
