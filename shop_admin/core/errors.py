"""
Базовые исключения ядра
"""

from shop_admin.core.constants import ErrorKind


class ShopAdminError(Exception):
    """Базовое исключение; kind - вид ошибки из ErrorKind"""

    kind: str = ""


class OrderValidationError(ShopAdminError):
    """
    Некорректные входные данные команды

    Содержит список полей с ошибками. Названия полей не локализуются здесь,
    это делает слой представления.
    """

    kind = ErrorKind.VALIDATION_ERROR

    def __init__(self, fields: list[str], message: str = ""):
        self.fields = fields
        super().__init__(message or f"Invalid fields: {', '.join(fields)}")
