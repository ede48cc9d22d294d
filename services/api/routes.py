from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from services.api.schemas import DocsExistResponse, PublishRequest, PublishResponse
from techdocs.publish.entity import EntityName
from techdocs.publish.publisher import Publisher

router = APIRouter(tags=["techdocs"])


def get_publisher(request: Request) -> Publisher:
    return request.app.state.publisher


def get_entity(namespace: str, kind: str, name: str) -> EntityName:
    try:
        return EntityName(namespace, kind, name)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/metadata/techdocs/{namespace}/{kind}/{name}")
async def get_techdocs_metadata(
    entity: EntityName = Depends(get_entity),
    publisher: Publisher = Depends(get_publisher),
) -> Any:
    return await publisher.fetch_techdocs_metadata_json(entity)


@router.get("/docs/{namespace}/{kind}/{name}/exists", response_model=DocsExistResponse)
async def docs_exist(
    entity: EntityName = Depends(get_entity),
    publisher: Publisher = Depends(get_publisher),
) -> DocsExistResponse:
    exists = await publisher.has_docs_been_generated(entity)
    return DocsExistResponse(entity=str(entity), exists=exists)


@router.post(
    "/publish/{namespace}/{kind}/{name}",
    response_model=PublishResponse,
    status_code=status.HTTP_201_CREATED,
)
async def publish_docs(
    payload: PublishRequest,
    entity: EntityName = Depends(get_entity),
    publisher: Publisher = Depends(get_publisher),
) -> PublishResponse:
    result = await publisher.publish(entity, payload.directory)
    return PublishResponse(**result.to_dict())


__all__ = ["router", "get_publisher", "get_entity"]
