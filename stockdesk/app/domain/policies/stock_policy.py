from __future__ import annotations

from enum import Enum

from stockdesk.sdk.models import Product


class StockStatus(str, Enum):
    OUT = "out"
    LOW = "low"
    OK = "ok"


class StockPolicy:
    @staticmethod
    def is_low_stock(product: Product) -> bool:
        return product.stock_level <= product.min_stock_threshold

    @staticmethod
    def is_out_of_stock(product: Product) -> bool:
        return product.stock_level == 0

    @staticmethod
    def status(product: Product) -> StockStatus:
        if StockPolicy.is_out_of_stock(product):
            return StockStatus.OUT
        if StockPolicy.is_low_stock(product):
            return StockStatus.LOW
        return StockStatus.OK
