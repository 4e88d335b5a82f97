"""
Product 모델
"""

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String, Text

from app.db.database import Base
from app.db.identifiers import OBJECT_ID_LENGTH, new_object_id


class Product(Base):
    """
    상품 모델

    Attributes:
        id: 상품 고유 ID (24자리 16진수, Primary Key)
        name: 상품명 (Not Null, 최대 120자)
        description: 상품 설명 (기본값: 빈 문자열, 최대 2000자)
        price: 가격 (Not Null, 0 이상)
        currency: 통화 코드 (기본값: USD, 항상 대문자)
        in_stock: 판매 가능 여부 (기본값: True)
        quantity: 재고 수량 (기본값: 0, 0 이상)
        category: 카테고리 (기본값: 빈 문자열, 최대 120자)
        images: 이미지 URL 목록 (JSON 배열)
        created_at: 생성 일시 (생성 시 설정, 변경 불가)
        updated_at: 수정 일시 (쓰기 작업마다 갱신)
    """

    __tablename__ = "products"

    id = Column(String(OBJECT_ID_LENGTH), primary_key=True, default=new_object_id)
    name = Column(String(120), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False)
    currency = Column(Text, nullable=False, default="USD")
    in_stock = Column(Boolean, nullable=False, default=True)
    quantity = Column(Integer, nullable=False, default=0)
    category = Column(String(120), nullable=False, default="", index=True)
    images = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        """Product 객체의 문자열 표현"""
        return f"<Product(id='{self.id}', name='{self.name}', price={self.price})>"

    def __str__(self) -> str:
        return f"Product: {self.name}"
