from typing import List, Optional, Tuple

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from apps.common.repository import GenericRepository
from .models import MAX_LINE_QUANTITY, Cart, CartItem


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def get_or_create_for_user(self, user_id: int) -> Tuple[Cart, bool]:
        """
        Insert-if-absent keyed by the unique ``user`` column. Django re-reads
        the row when a concurrent insert wins the race, so callers always get
        the single cart for the user.
        """
        return self.model.objects.get_or_create(user_id=user_id)

    def lock_for_user(self, user_id: int) -> Optional[Cart]:
        return self.get_for_update(user_id=user_id)

    def touch(self, cart_id) -> None:
        self.model.objects.filter(cart_id=cart_id).update(updated_at=timezone.now())


class CartItemRepository(GenericRepository[CartItem]):
    def __init__(self):
        super().__init__(CartItem)

    def list_with_products(self, cart_id) -> List[CartItem]:
        """Cart items joined with their product row (live name and price)."""
        return list(
            self.model.objects.filter(cart_id=cart_id)
            .select_related("product")
            .order_by("added_at", "cart_item_id")
        )

    def increment_or_create(self, cart_id, product_id, quantity: int) -> Optional[CartItem]:
        """
        Add ``quantity`` to the (cart, product) line, creating it when absent.

        The increment is a single ``UPDATE ... SET quantity = quantity + n`` so
        concurrent adds never lose updates. When two requests race to create
        the same line, the loser's insert violates the unique constraint and
        falls back to the increment.

        Returns None, leaving the line untouched, when the merged quantity
        would exceed ``MAX_LINE_QUANTITY``.
        """
        if self._increment(cart_id, product_id, quantity):
            return self._line(cart_id, product_id).get()
        if self._line(cart_id, product_id).exists():
            return None
        try:
            with transaction.atomic():
                return self.model.objects.create(
                    cart_id=cart_id, product_id=product_id, quantity=quantity
                )
        except IntegrityError:
            if self._increment(cart_id, product_id, quantity):
                return self._line(cart_id, product_id).get()
            if not self._line(cart_id, product_id).exists():
                raise
            return None

    def _line(self, cart_id, product_id):
        return self.model.objects.filter(cart_id=cart_id, product_id=product_id)

    def _increment(self, cart_id, product_id, quantity: int) -> bool:
        updated = (
            self._line(cart_id, product_id)
            .filter(quantity__lte=MAX_LINE_QUANTITY - quantity)
            .update(quantity=F("quantity") + quantity)
        )
        return updated > 0

    def delete_for_cart(self, cart_id) -> int:
        deleted, _ = self.model.objects.filter(cart_id=cart_id).delete()
        return deleted
