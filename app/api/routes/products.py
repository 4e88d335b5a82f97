"""
상품 CRUD API 엔드포인트

상품 생성, 목록 조회(검색/정렬/페이지네이션), 상세 조회, 수정, 삭제 기능을 제공합니다.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_app_settings, get_db
from app.api.params import page_count, resolve_limit, resolve_page
from app.core.config import Settings
from app.core.exceptions import InvalidProductIdException, ProductNotFoundException
from app.db.identifiers import is_valid_object_id
from app.schemas.product import (
    ErrorResponse,
    Pagination,
    ProductDeleteResponse,
    ProductListResponse,
    ProductResponse,
)
from app.services.product_service import ProductService

router = APIRouter()

BAD_REQUEST = {400: {"model": ErrorResponse}}
NOT_FOUND = {404: {"model": ErrorResponse}}


def _as_dict(payload: Any) -> dict:
    # JSON 객체가 아닌 본문은 빈 객체로 취급
    return payload if isinstance(payload, dict) else {}


def _check_product_id(product_id: str) -> None:
    if not is_valid_object_id(product_id):
        raise InvalidProductIdException(product_id)


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
)
def create_product(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
):
    """
    새 상품을 생성합니다.

    Args:
        payload: 상품 필드 (name, price 필수)
        db: 데이터베이스 세션

    Returns:
        ProductResponse: 생성된 상품 정보

    Example:
        Request:
        ```json
        {"name": "Red Shoe", "price": 59.9, "category": "shoes"}
        ```

        Response (201):
        ```json
        {
            "id": "65a1f0c2e4b0a1b2c3d4e5f6",
            "name": "Red Shoe",
            "description": "",
            "price": 59.9,
            "currency": "USD",
            "inStock": true,
            "quantity": 0,
            "category": "shoes",
            "images": [],
            "createdAt": "2025-01-22T10:30:00.000Z",
            "updatedAt": "2025-01-22T10:30:00.000Z"
        }
        ```
    """
    payload = _as_dict(payload)

    if not payload.get("name"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="name is required"
        )
    if payload.get("price") is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="price is required"
        )

    return ProductService.create_product(payload, db)


@router.get("/products", response_model=ProductListResponse)
def list_products(
    q: Optional[str] = Query(None, description="name/category 검색어"),
    page: Optional[str] = Query(None, description="페이지 번호 (기본값: 1)"),
    limit: Optional[str] = Query(None, description="페이지 크기 (1~100, 기본값: 10)"),
    sort: Optional[str] = Query(None, description="정렬 (기본값: -createdAt)"),
    db: Session = Depends(get_db),
):
    """
    상품 목록을 조회합니다.

    Returns:
        ProductListResponse: 현재 페이지 상품 목록과 페이지네이션 정보

    Example:
        Response (200):
        ```json
        {
            "items": [...],
            "pagination": {"total": 15, "page": 1, "limit": 10, "pages": 2}
        }
        ```
    """
    page_num = resolve_page(page)
    limit_num = resolve_limit(limit)

    items, total = ProductService.list_products(
        db,
        q=q,
        sort=sort,
        skip=(page_num - 1) * limit_num,
        limit=limit_num,
    )

    return ProductListResponse(
        items=[ProductResponse.model_validate(item) for item in items],
        pagination=Pagination(
            total=total,
            page=page_num,
            limit=limit_num,
            pages=page_count(total, limit_num),
        ),
    )


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
def get_product(
    product_id: str,
    db: Session = Depends(get_db),
):
    """
    특정 상품의 상세 정보를 조회합니다.

    Raises:
        InvalidProductIdException: ID 형식이 올바르지 않은 경우 (400)
        ProductNotFoundException: 상품을 찾을 수 없는 경우 (404)
    """
    _check_product_id(product_id)

    product = ProductService.get_product(product_id, db)
    if product is None:
        raise ProductNotFoundException(product_id)

    return product


@router.put(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
def update_product(
    product_id: str,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    상품을 수정합니다.

    full_update_mode 설정이 "merge"(기본값)이면 전달된 필드만 병합하고,
    "replace"이면 생략된 필드를 기본값으로 되돌립니다.
    """
    _check_product_id(product_id)

    product = ProductService.update_product(
        product_id,
        _as_dict(payload),
        db,
        replace=settings.full_update_mode == "replace",
    )
    if product is None:
        raise ProductNotFoundException(product_id)

    return product


@router.patch(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
def patch_product(
    product_id: str,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
):
    """
    상품의 일부 필드만 수정합니다.

    Example:
        Request:
        ```json
        {"quantity": 5}
        ```
    """
    _check_product_id(product_id)

    product = ProductService.patch_product(product_id, _as_dict(payload), db)
    if product is None:
        raise ProductNotFoundException(product_id)

    return product


@router.delete(
    "/products/{product_id}",
    response_model=ProductDeleteResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
):
    """
    상품을 삭제합니다.

    Example:
        Response (200):
        ```json
        {"ok": true, "message": "Product deleted", "id": "65a1f0c2e4b0a1b2c3d4e5f6"}
        ```
    """
    _check_product_id(product_id)

    product = ProductService.delete_product(product_id, db)
    if product is None:
        raise ProductNotFoundException(product_id)

    return ProductDeleteResponse(id=product.id)
