"""
Pydantic 스키마 모듈
"""

from app.schemas.product import (
    ProductFields,
    ProductPatch,
    ProductResponse,
    ProductListResponse,
    ProductDeleteResponse,
    Pagination,
    HealthResponse,
    ErrorResponse,
    validate_product_payload,
)

__all__ = [
    "ProductFields",
    "ProductPatch",
    "ProductResponse",
    "ProductListResponse",
    "ProductDeleteResponse",
    "Pagination",
    "HealthResponse",
    "ErrorResponse",
    "validate_product_payload",
]
