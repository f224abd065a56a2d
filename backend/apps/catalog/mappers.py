from typing import Iterable, List

from .dtos import ProductDTO
from .models import Product


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            product_id=product.product_id,
            name=product.name,
            description=product.description or "",
            price=product.price,
            stock_quantity=product.stock_quantity,
            category=product.category,
            is_available=product.is_available,
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]
