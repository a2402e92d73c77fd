from pydantic import BaseModel, Field
from typing import Optional, Dict, Any

# Request bodies for the product endpoints.

class ProductIn(BaseModel):
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    category: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None

class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    category: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None

# name and price may be omitted on update but never cleared
REQUIRED_FIELDS = ("name", "price")

def _make_product_dict(product_id: str, p: ProductIn) -> Dict[str, Any]:
    return {
        "id": product_id,
        "name": p.name,
        "price": p.price,
        "category": p.category,
        "description": p.description,
        "image": p.image,
    }
