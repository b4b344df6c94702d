from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Depends

from ...services.posts_service import PostsService, get_posts_service
from ..body import json_object_body
from ..schemas.posts import ErrorResponse, PostResponse


router = APIRouter()


@router.post(
    "",
    response_model=PostResponse,
    responses={400: {"model": ErrorResponse}},
    summary="포스트 생성",
    description=(
        "title, content 는 필수이며 그 외 필드는 그대로 저장된다. "
        "id, createdAt, updatedAt 은 서버가 부여한다."
    ),
)
def create_post(
    body: dict[str, Any] = Depends(json_object_body),
    service: PostsService = Depends(get_posts_service),
) -> PostResponse:
    post = service.create_post(body)
    return PostResponse.from_domain(post)


@router.get(
    "",
    response_model=List[PostResponse],
    summary="포스트 목록 조회",
    description="저장된 모든 포스트를 id 오름차순으로 반환한다.",
)
def list_posts(
    service: PostsService = Depends(get_posts_service),
) -> List[PostResponse]:
    return [PostResponse.from_domain(post) for post in service.list_posts()]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    responses={404: {"model": ErrorResponse}},
    summary="단일 포스트 조회",
)
def get_post(
    post_id: str,
    service: PostsService = Depends(get_posts_service),
) -> PostResponse:
    return PostResponse.from_domain(service.get_post(post_id))


@router.put(
    "/{post_id}",
    response_model=PostResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="포스트 수정",
    description="전달된 필드만 기존 포스트 위에 병합하고 updatedAt 을 갱신한다.",
)
def update_post(
    post_id: str,
    body: dict[str, Any] = Depends(json_object_body),
    service: PostsService = Depends(get_posts_service),
) -> PostResponse:
    post = service.update_post(post_id, body)
    return PostResponse.from_domain(post)


@router.delete(
    "/{post_id}",
    response_model=PostResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="포스트 삭제",
    description="삭제된 포스트를 그대로 반환한다.",
)
def delete_post(
    post_id: str,
    service: PostsService = Depends(get_posts_service),
) -> PostResponse:
    return PostResponse.from_domain(service.delete_post(post_id))
