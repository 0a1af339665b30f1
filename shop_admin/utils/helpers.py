"""
Вспомогательные функции
"""

from datetime import datetime, timedelta, timezone


MOSCOW_TZ = timezone(timedelta(hours=3))


def get_now() -> datetime:
    """
    Получить текущее время в московском часовом поясе

    Returns:
        datetime объект с московским timezone
    """
    return datetime.now(MOSCOW_TZ)


def format_datetime(dt: datetime | None) -> str:
    """Форматирование даты и времени для отображения"""
    if dt is None:
        return "-"
    return dt.strftime("%d.%m.%Y %H:%M")


def format_amount(amount) -> str:
    """Форматирование суммы с двумя знаками после запятой"""
    return f"{amount:.2f}"
