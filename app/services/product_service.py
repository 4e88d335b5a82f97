"""상품 CRUD 서비스 (데이터 접근 계층)."""

import re
from datetime import datetime, timezone
from typing import Any, Optional

from loguru import logger
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidProductIdException, StoreUnavailableException
from app.db.identifiers import (
    is_valid_object_id,
    new_object_id,
    normalize_object_id,
)
from app.models import Product
from app.schemas.product import validate_product_payload

DEFAULT_SORT = "-createdAt"

# 정렬 가능한 필드 (JSON 필드명과 모델 속성명 모두 허용)
SORTABLE_FIELDS = {
    "id": Product.id,
    "_id": Product.id,
    "name": Product.name,
    "description": Product.description,
    "price": Product.price,
    "currency": Product.currency,
    "inStock": Product.in_stock,
    "in_stock": Product.in_stock,
    "quantity": Product.quantity,
    "category": Product.category,
    "createdAt": Product.created_at,
    "created_at": Product.created_at,
    "updatedAt": Product.updated_at,
    "updated_at": Product.updated_at,
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_sort(sort: Optional[str]) -> list:
    """
    정렬 문자열을 ORDER BY 절 목록으로 변환합니다.

    공백 또는 쉼표로 구분된 키를 받으며, "-" 접두사는 내림차순입니다.
    알 수 없는 키는 무시하고, 유효한 키가 없으면 createdAt 내림차순을 사용합니다.
    페이지네이션이 안정적이도록 항상 id를 마지막 기준으로 추가합니다.

    Example:
        "-price name" -> price DESC, name ASC, id ASC
    """
    clauses = []
    used = set()
    descending = True

    for key in re.split(r"[\s,]+", (sort or "").strip()):
        direction_desc = key.startswith("-")
        name = key.lstrip("+-")
        column = SORTABLE_FIELDS.get(name)
        if column is None or column.key in used:
            continue
        used.add(column.key)
        clauses.append(column.desc() if direction_desc else column.asc())
        descending = direction_desc

    if not clauses:
        return [Product.created_at.desc(), Product.id.desc()]

    if "id" not in used:
        clauses.append(Product.id.desc() if descending else Product.id.asc())
    return clauses


def _ensure_valid_id(product_id: str) -> str:
    if not is_valid_object_id(product_id):
        raise InvalidProductIdException(product_id)
    return normalize_object_id(product_id)


def _commit(db: Session, operation: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to {} product", operation)
        raise StoreUnavailableException(operation) from e


class ProductService:
    """상품 생성, 조회, 수정, 삭제 서비스."""

    @staticmethod
    def create_product(payload: dict[str, Any], db: Session) -> Product:
        """
        상품 필드를 검증한 뒤 ID와 생성/수정 일시를 부여하여 저장합니다.

        Args:
            payload: 상품 필드 (요청 본문)
            db: DB 세션

        Returns:
            생성된 Product 객체 (created_at == updated_at)

        Raises:
            ProductValidationException: 필드 제약 조건 위반 시
            StoreUnavailableException: DB 저장 실패 시
        """
        fields = validate_product_payload(payload)

        now = utcnow()
        product = Product(id=new_object_id(), created_at=now, updated_at=now, **fields)
        db.add(product)
        _commit(db, "create")
        db.refresh(product)

        logger.info("Product created: id={} name='{}'", product.id, product.name)
        return product

    @staticmethod
    def get_product(product_id: str, db: Session) -> Optional[Product]:
        """
        상품 ID로 상품을 조회합니다.

        Args:
            product_id: 상품 ID
            db: DB 세션

        Returns:
            Product 객체 또는 None

        Raises:
            InvalidProductIdException: ID 형식이 올바르지 않은 경우 (DB 접근 전)
        """
        product_id = _ensure_valid_id(product_id)
        try:
            return db.get(Product, product_id)
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Failed to read product {}", product_id)
            raise StoreUnavailableException("read") from e

    @staticmethod
    def list_products(
        db: Session,
        q: Optional[str] = None,
        sort: Optional[str] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Product], int]:
        """
        상품 목록과 전체 개수를 조회합니다.

        Args:
            db: DB 세션
            q: 검색어 (name 또는 category에 대소문자 구분 없이 부분 일치)
            sort: 정렬 문자열 (예: "-createdAt", "price -name")
            skip: 건너뛸 레코드 수 (페이지네이션)
            limit: 조회할 최대 레코드 수

        Returns:
            (현재 페이지의 Product 리스트, 필터와 일치하는 전체 개수)
        """
        query = db.query(Product)

        search = (q or "").strip()
        if search:
            query = query.filter(
                or_(
                    Product.name.icontains(search, autoescape=True),
                    Product.category.icontains(search, autoescape=True),
                )
            )

        try:
            total = query.count()
            items = (
                query.order_by(*parse_sort(sort or DEFAULT_SORT))
                .offset(skip)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Failed to list products")
            raise StoreUnavailableException("list") from e

        return items, total

    @staticmethod
    def update_product(
        product_id: str,
        payload: dict[str, Any],
        db: Session,
        replace: bool = False,
    ) -> Optional[Product]:
        """
        상품 전체 수정 (PUT)

        replace=False이면 전달된 필드만 병합하고,
        replace=True이면 생략된 필드를 기본값으로 되돌립니다.

        Returns:
            수정된 Product 객체 또는 None (상품이 없는 경우)

        Raises:
            InvalidProductIdException: ID 형식이 올바르지 않은 경우
            ProductValidationException: 필드 제약 조건 위반 시
        """
        product_id = _ensure_valid_id(product_id)
        fields = validate_product_payload(payload, partial=not replace)
        return ProductService._apply_update(product_id, fields, db)

    @staticmethod
    def patch_product(
        product_id: str, payload: dict[str, Any], db: Session
    ) -> Optional[Product]:
        """
        상품 부분 수정 (PATCH)

        전달된 필드만 변경하고 updated_at을 갱신합니다.
        """
        product_id = _ensure_valid_id(product_id)
        fields = validate_product_payload(payload, partial=True)
        return ProductService._apply_update(product_id, fields, db)

    @staticmethod
    def delete_product(product_id: str, db: Session) -> Optional[Product]:
        """
        상품을 삭제합니다.

        Returns:
            삭제된 Product 객체 또는 None (상품이 없는 경우)
        """
        product = ProductService.get_product(product_id, db)
        if product is None:
            return None

        db.delete(product)
        _commit(db, "delete")

        logger.info("Product deleted: id={}", product.id)
        return product

    @staticmethod
    def _apply_update(
        product_id: str, fields: dict[str, Any], db: Session
    ) -> Optional[Product]:
        product = ProductService.get_product(product_id, db)
        if product is None:
            return None

        for field, value in fields.items():
            setattr(product, field, value)
        product.updated_at = utcnow()

        _commit(db, "update")
        db.refresh(product)

        logger.info(
            "Product updated: id={} fields={}", product_id, sorted(fields.keys())
        )
        return product
