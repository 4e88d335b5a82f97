"""Tests for ProductService."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    InvalidProductIdException,
    ProductValidationException,
    StoreUnavailableException,
)
from app.db.identifiers import is_valid_object_id
from app.models import Product
from app.services.product_service import ProductService, parse_sort

MISSING_ID = "0123456789abcdef01234567"


def _create(db: Session, **fields) -> Product:
    payload = {"name": "Red Shoe", "price": 10}
    payload.update(fields)
    return ProductService.create_product(payload, db)


class TestCreateProduct:
    """Test: 상품 생성 테스트"""

    def test_create_product_success(self, test_db: Session):
        """Test: ID와 생성/수정 일시가 부여되는지 확인"""
        product = _create(test_db, currency="eur", category=" shoes ")

        assert is_valid_object_id(product.id)
        assert product.currency == "EUR"
        assert product.category == "shoes"
        assert product.created_at == product.updated_at
        assert test_db.query(Product).count() == 1

    def test_create_product_validation_error(self, test_db: Session):
        """Test: 제약 조건 위반 시 저장하지 않음"""
        with pytest.raises(ProductValidationException) as exc_info:
            _create(test_db, price=-1)

        assert "price" in exc_info.value.message
        assert exc_info.value.status_code == 400
        assert test_db.query(Product).count() == 0

    def test_create_product_commit_failure(self):
        """Test: DB 커밋 실패 시 롤백 후 StoreUnavailableException 발생"""
        db = MagicMock()
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("db down"))

        with pytest.raises(StoreUnavailableException):
            ProductService.create_product({"name": "Red Shoe", "price": 10}, db)

        db.rollback.assert_called_once()


class TestGetProduct:
    """Test: 상품 조회 테스트"""

    def test_get_product(self, test_db: Session):
        """Test: ID로 상품 조회"""
        created = _create(test_db)

        product = ProductService.get_product(created.id, test_db)

        assert product is not None
        assert product.name == "Red Shoe"

    def test_get_product_uppercase_id(self, test_db: Session):
        """Test: 대문자 ID도 같은 상품으로 조회"""
        created = _create(test_db)

        product = ProductService.get_product(created.id.upper(), test_db)

        assert product is not None
        assert product.id == created.id

    def test_get_product_read_failure_rolls_back(self):
        """Test: 조회 실패 시 롤백 후 StoreUnavailableException 발생"""
        db = MagicMock()
        db.get.side_effect = OperationalError("SELECT", {}, Exception("db down"))

        with pytest.raises(StoreUnavailableException):
            ProductService.get_product(MISSING_ID, db)

        db.rollback.assert_called_once()

    def test_get_product_not_found(self, test_db: Session):
        """Test: 존재하지 않는 ID는 None 반환"""
        assert ProductService.get_product(MISSING_ID, test_db) is None

    @pytest.mark.parametrize(
        "method, args",
        [
            ("get_product", ()),
            ("update_product", ({"quantity": 1},)),
            ("patch_product", ({"quantity": 1},)),
            ("delete_product", ()),
        ],
    )
    def test_invalid_id_checked_before_store(self, method, args):
        """Test: 잘못된 ID는 DB 접근 전에 InvalidProductIdException 발생"""
        db = MagicMock()

        with pytest.raises(InvalidProductIdException):
            getattr(ProductService, method)("bad-id", *args, db)

        assert db.method_calls == []


class TestListProducts:
    """Test: 상품 목록 조회 테스트"""

    def test_list_products_failure_rolls_back(self):
        """Test: 목록 조회 실패 시 롤백 후 StoreUnavailableException 발생"""
        db = MagicMock()
        db.query.return_value.count.side_effect = OperationalError(
            "SELECT", {}, Exception("db down")
        )

        with pytest.raises(StoreUnavailableException):
            ProductService.list_products(db)

        db.rollback.assert_called_once()

    def test_list_products_total_ignores_pagination(self, test_db: Session):
        """Test: total은 페이지네이션과 무관하게 전체 개수"""
        for i in range(5):
            _create(test_db, name=f"Product {i}")

        items, total = ProductService.list_products(test_db, skip=2, limit=2)

        assert len(items) == 2
        assert total == 5

    def test_list_products_filter_name_or_category(self, test_db: Session):
        """Test: name 또는 category에 대소문자 무시 부분 일치"""
        _create(test_db, name="Red Shoe", category="footwear")
        _create(test_db, name="Blue Hat", category="Hats")
        _create(test_db, name="Shoe Horn", category="tools")

        items, total = ProductService.list_products(test_db, q="SHOE", sort="name")

        assert [item.name for item in items] == ["Red Shoe", "Shoe Horn"]
        assert total == 2

        items, total = ProductService.list_products(test_db, q="hat")
        assert [item.name for item in items] == ["Blue Hat"]

    def test_list_products_blank_query(self, test_db: Session):
        """Test: 공백 검색어는 필터를 적용하지 않음"""
        _create(test_db, name="Red Shoe")
        _create(test_db, name="Blue Hat")

        _, total = ProductService.list_products(test_db, q="   ")

        assert total == 2

    def test_list_products_sort_descending(self, test_db: Session):
        """Test: -price 정렬"""
        for price in (20, 5, 40):
            _create(test_db, name=f"P{price}", price=price)

        items, _ = ProductService.list_products(test_db, sort="-price")

        assert [item.price for item in items] == [40, 20, 5]


class TestUpdateProduct:
    """Test: 상품 수정 테스트"""

    def test_patch_product(self, test_db: Session):
        """Test: 전달된 필드만 변경하고 updated_at 갱신"""
        created = _create(test_db, category="shoes")
        created_at = created.created_at

        product = ProductService.patch_product(created.id, {"quantity": 5}, test_db)

        assert product.quantity == 5
        assert product.category == "shoes"
        assert product.created_at == created_at
        assert product.updated_at >= created_at

    def test_update_product_merge(self, test_db: Session):
        """Test: replace=False이면 생략된 필드 유지"""
        created = _create(test_db, category="shoes")

        product = ProductService.update_product(created.id, {"price": 3}, test_db)

        assert product.price == 3
        assert product.category == "shoes"

    def test_update_product_replace(self, test_db: Session):
        """Test: replace=True이면 생략된 필드를 기본값으로"""
        created = _create(test_db, category="shoes", images=["a.png"])

        product = ProductService.update_product(
            created.id, {"name": "Blue Hat", "price": 3}, test_db, replace=True
        )

        assert product.name == "Blue Hat"
        assert product.category == ""
        assert product.images == []

    def test_update_product_replace_requires_name(self, test_db: Session):
        """Test: replace=True이면 name/price 필수"""
        created = _create(test_db)

        with pytest.raises(ProductValidationException):
            ProductService.update_product(created.id, {"price": 3}, test_db, replace=True)

    def test_update_missing_product(self, test_db: Session):
        """Test: 존재하지 않는 상품 수정은 None 반환"""
        assert ProductService.patch_product(MISSING_ID, {"quantity": 1}, test_db) is None
        assert ProductService.update_product(MISSING_ID, {"quantity": 1}, test_db) is None


class TestDeleteProduct:
    """Test: 상품 삭제 테스트"""

    def test_delete_product(self, test_db: Session):
        """Test: 삭제 후 재삭제는 None"""
        created = _create(test_db)

        deleted = ProductService.delete_product(created.id, test_db)

        assert deleted is not None
        assert deleted.id == created.id
        assert ProductService.get_product(created.id, test_db) is None
        assert ProductService.delete_product(created.id, test_db) is None


class TestParseSort:
    """Test: 정렬 문자열 파싱"""

    @pytest.mark.parametrize(
        "sort, expected",
        [
            (None, ["products.created_at DESC", "products.id DESC"]),
            ("", ["products.created_at DESC", "products.id DESC"]),
            ("-createdAt", ["products.created_at DESC", "products.id DESC"]),
            ("unknown", ["products.created_at DESC", "products.id DESC"]),
            ("price", ["products.price ASC", "products.id ASC"]),
            (
                "-price name",
                ["products.price DESC", "products.name ASC", "products.id ASC"],
            ),
            (
                "price,-quantity",
                ["products.price ASC", "products.quantity DESC", "products.id DESC"],
            ),
            ("in_stock -id", ["products.in_stock ASC", "products.id DESC"]),
            ("-description", ["products.description DESC", "products.id DESC"]),
        ],
    )
    def test_parse_sort(self, sort, expected):
        """Test: 정렬 키와 방향 변환"""
        assert [str(clause) for clause in parse_sort(sort)] == expected
