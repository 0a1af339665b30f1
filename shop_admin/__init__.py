"""Back-office ядро магазина: отгрузка заказов и обработка возвратов"""

__version__ = "1.0.0"
