from pydantic import BaseModel
from typing import Optional, List, Sequence


class Product(BaseModel):
    id: str
    name: str
    description: str = ""
    price: float
    image_url: Optional[str] = None
    is_american: bool = False
    alternative_to: Optional[str] = None  # id of the product this one replaces

    def resolve_alternative(self, products: Sequence["Product"]) -> Optional["Product"]:
        if self.alternative_to is None:
            return None
        return next((p for p in products if p.id == self.alternative_to), None)


def validate_alternatives(products: Sequence[Product]) -> None:
    """Every alternative_to must point at a product id present in the same list."""
    ids = {p.id for p in products}
    dangling = [p.id for p in products if p.alternative_to is not None and p.alternative_to not in ids]
    if dangling:
        raise ValueError(f"alternative_to does not resolve for products: {', '.join(dangling)}")


# Shown when the hosted store is unconfigured or unreachable
DEMO_PRODUCTS: List[Product] = [
    Product(
        id="1",
        name="American Cola",
        description="Classic American cola drink",
        price=2.99,
        image_url="https://images.unsplash.com/photo-1622483767028-3f66f32aef97?auto=format&fit=crop&q=80&w=2070",
        is_american=True,
        alternative_to=None,
    ),
    Product(
        id="2",
        name="Local Fizz",
        description="Local alternative cola drink",
        price=1.99,
        image_url="https://images.unsplash.com/photo-1625772299848-391b6a87d7b3?auto=format&fit=crop&q=80&w=1974",
        is_american=False,
        alternative_to="1",
    ),
]


def demo_products() -> List[Product]:
    return [p.model_copy() for p in DEMO_PRODUCTS]
