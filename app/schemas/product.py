"""
상품 관련 Pydantic 스키마

상품 필드 검증 함수와 API 요청/응답 모델을 정의합니다.
JSON 필드명은 camelCase(inStock, createdAt)이며,
요청 본문에서는 snake_case(in_stock)도 허용합니다.
"""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    field_serializer,
)
from pydantic.alias_generators import to_camel

from app.core.exceptions import ProductValidationException

ProductName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)
]
ProductDescription = Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=2000)
]
ProductCategory = Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=120)
]
CurrencyCode = Annotated[str, StringConstraints(strip_whitespace=True, to_upper=True)]
Price = Annotated[float, Field(ge=0, allow_inf_nan=False)]
Quantity = Annotated[int, Field(ge=0)]


class ProductFields(BaseModel):
    """
    상품 전체 필드 스키마 (생성 및 전체 교체용)

    정의되지 않은 필드와 시스템 필드(id, createdAt, updatedAt)는 무시됩니다.

    Example:
        {
            "name": "Red Shoe",
            "price": 59.9,
            "currency": "usd",
            "quantity": 3,
            "category": "shoes"
        }
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: ProductName = Field(..., description="상품명", examples=["Red Shoe"])
    description: ProductDescription = Field("", description="상품 설명")
    price: Price = Field(..., description="가격 (0 이상)", examples=[59.9])
    currency: CurrencyCode = Field("USD", description="통화 코드 (대문자로 저장)")
    in_stock: bool = Field(True, description="판매 가능 여부")
    quantity: Quantity = Field(0, description="재고 수량 (0 이상)")
    category: ProductCategory = Field("", description="카테고리")
    images: list[str] = Field(default_factory=list, description="이미지 URL 목록")


class ProductPatch(BaseModel):
    """
    상품 부분 수정 스키마

    생략된 필드는 변경하지 않습니다.
    기본값은 검증되지 않으므로 생략은 허용되고, 명시적인 null은 타입 오류가 됩니다.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: ProductName = None
    description: ProductDescription = None
    price: Price = None
    currency: CurrencyCode = None
    in_stock: bool = None
    quantity: Quantity = None
    category: ProductCategory = None
    images: list[str] = None


def _format_error(error: dict) -> str:
    location = ".".join(str(part) for part in error["loc"])
    if not location:
        return error["msg"]
    return f"{location}: {error['msg']}"


def validate_product_payload(payload: Any, partial: bool = False) -> dict[str, Any]:
    """
    상품 필드를 검증하고 정규화된 값을 반환합니다.

    저장소에 쓰기 전에 항상 호출되어야 합니다.

    Args:
        payload: 요청 본문 (dict)
        partial: True이면 전달된 필드만 검증 (부분 수정)

    Returns:
        모델 속성명(snake_case)을 키로 하는 dict.
        partial=False이면 생략된 필드는 기본값으로 채워집니다.

    Raises:
        ProductValidationException: 제약 조건을 위반한 경우
    """
    schema = ProductPatch if partial else ProductFields
    try:
        fields = schema.model_validate(payload)
    except ValidationError as e:
        raise ProductValidationException(
            [_format_error(error) for error in e.errors()]
        ) from e

    return fields.model_dump(exclude_unset=partial)


class ProductResponse(BaseModel):
    """
    상품 정보 응답 스키마

    Example:
        {
            "id": "65a1f0c2e4b0a1b2c3d4e5f6",
            "name": "Red Shoe",
            "description": "",
            "price": 59.9,
            "currency": "USD",
            "inStock": true,
            "quantity": 3,
            "category": "shoes",
            "images": [],
            "createdAt": "2025-01-22T10:30:00.000Z",
            "updatedAt": "2025-01-22T10:30:00.000Z"
        }
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(..., description="상품 ID")
    name: str = Field(..., description="상품명")
    description: str = Field(..., description="상품 설명")
    price: float = Field(..., description="가격")
    currency: str = Field(..., description="통화 코드")
    in_stock: bool = Field(..., description="판매 가능 여부")
    quantity: int = Field(..., description="재고 수량")
    category: str = Field(..., description="카테고리")
    images: list[str] = Field(..., description="이미지 URL 목록")
    created_at: datetime = Field(..., description="상품 생성 일시")
    updated_at: datetime = Field(..., description="상품 수정 일시")

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        # 저장소가 timezone 정보를 버리는 경우(SQLite) UTC로 간주
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        iso = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
        return iso.replace("+00:00", "Z")


class Pagination(BaseModel):
    """페이지네이션 정보"""

    total: int = Field(..., description="필터와 일치하는 전체 상품 수")
    page: int = Field(..., description="현재 페이지 (1부터 시작)")
    limit: int = Field(..., description="페이지 크기")
    pages: int = Field(..., description="전체 페이지 수")


class ProductListResponse(BaseModel):
    """상품 목록 응답 스키마"""

    items: list[ProductResponse]
    pagination: Pagination


class ProductDeleteResponse(BaseModel):
    """
    상품 삭제 응답 스키마

    Example:
        {"ok": true, "message": "Product deleted", "id": "65a1f0c2e4b0a1b2c3d4e5f6"}
    """

    ok: bool = True
    message: str = "Product deleted"
    id: str


class HealthResponse(BaseModel):
    """헬스체크 응답 스키마"""

    ok: bool = True
    service: str
    time: str


class ErrorResponse(BaseModel):
    """에러 응답 스키마"""

    message: str
