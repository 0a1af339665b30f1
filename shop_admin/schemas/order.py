"""Pydantic схемы для валидации команд по заказам"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from shop_admin.core.errors import OrderValidationError


class ShipOrderSchema(BaseModel):
    """Схема команды отгрузки: транспортная компания и трек-номер"""

    model_config = ConfigDict(str_strip_whitespace=True, coerce_numbers_to_str=True)

    express_company: str = Field(..., min_length=1, max_length=100, description="Транспортная компания")
    express_no: str = Field(..., min_length=1, max_length=100, description="Трек-номер")


class DecideRefundSchema(BaseModel):
    """Схема решения по возврату"""

    model_config = ConfigDict(str_strip_whitespace=True)

    agree: bool = Field(..., description="Одобрить возврат")
    reason: str | None = Field(None, validate_default=True, description="Причина отказа")

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, v: str | None, info: ValidationInfo) -> str | None:
        """При отказе причина обязательна"""
        if info.data.get("agree") is False and not v:
            raise ValueError("Причина отказа обязательна")
        return v or None


def validate_command(schema: type[BaseModel], data: dict[str, Any]) -> BaseModel:
    """
    Валидация данных команды

    Args:
        schema: Класс pydantic схемы
        data: Входные данные

    Returns:
        Экземпляр схемы

    Raises:
        OrderValidationError: Со списком полей, не прошедших проверку
    """
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        fields = []
        for error in e.errors():
            name = str(error["loc"][0]) if error["loc"] else "__root__"
            if name not in fields:
                fields.append(name)
        raise OrderValidationError(fields) from e
