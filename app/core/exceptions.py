"""
커스텀 예외 정의

애플리케이션 전역에서 사용되는 커스텀 예외 클래스들입니다.
모든 예외는 status_code를 가지며, 에러 핸들러가 {"message": ...} 형태로 변환합니다.
"""


class AppException(Exception):
    """
    애플리케이션 예외의 기본 클래스

    HTTP Status Code: 500 Internal Server Error (기본값)
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ProductValidationException(AppException):
    """
    상품 필드가 스키마 제약 조건을 위반할 때 발생하는 예외

    HTTP Status Code: 400 Bad Request
    """

    status_code = 400

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Product validation failed: {', '.join(errors)}")


class InvalidProductIdException(AppException):
    """
    상품 ID 형식이 올바르지 않을 때 발생하는 예외

    HTTP Status Code: 400 Bad Request
    """

    status_code = 400

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__("Invalid product id")


class ProductNotFoundException(AppException):
    """
    상품을 찾을 수 없을 때 발생하는 예외

    HTTP Status Code: 404 Not Found
    """

    status_code = 404

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__("Product not found")


class StoreUnavailableException(AppException):
    """
    데이터베이스 작업이 실패했을 때 발생하는 예외

    HTTP Status Code: 500 Internal Server Error
    """

    status_code = 500

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Database operation failed: {operation}")
