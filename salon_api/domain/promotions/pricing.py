"""Discount arithmetic for promotion codes"""

from typing import Optional

from ...models_billing import PromotionType

PERCENTAGE_TYPES = {
    PromotionType.PERCENTAGE_DISCOUNT,
    PromotionType.FIRST_TIME_CUSTOMER,
    PromotionType.SEASONAL,
}

FIXED_TYPES = {
    PromotionType.FIXED_DISCOUNT,
    PromotionType.PACKAGE_DEAL,
}


def calculate_discount(
    promotion_type: PromotionType,
    discount_value: float,
    amount: float,
    max_discount_amount: Optional[float] = None,
) -> float:
    """Discount for an amount; never more than the amount itself, 0 for non-monetary promotions"""
    if promotion_type in PERCENTAGE_TYPES:
        discount = amount * discount_value / 100
        if max_discount_amount is not None:
            discount = min(discount, max_discount_amount)
    elif promotion_type in FIXED_TYPES:
        discount = discount_value
    else:
        return 0.0
    return round(min(discount, amount), 2)
