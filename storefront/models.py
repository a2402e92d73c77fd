# storefront/models.py
from pydantic import BaseModel
from typing import Optional, Dict, Any

PLACEHOLDER_IMAGE = "https://placehold.co/300?text=No+Image"
DEFAULT_DESCRIPTION = "No description available."

ROLE_ADMIN = "admin"
ROLE_USER = "user"

class Product(BaseModel):
    id: str
    name: str
    price: float
    category: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None

    @property
    def display_description(self) -> str:
        return self.description or DEFAULT_DESCRIPTION

class Session(BaseModel):
    name: str
    role: str = ROLE_USER

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

class ProductDraft(BaseModel):
    """Contents of the admin inventory form."""
    name: str = ""
    price: Optional[float] = None
    category: str = ""
    description: str = ""
    image: str = ""

    @classmethod
    def from_product(cls, p: Product) -> "ProductDraft":
        return cls(
            name=p.name,
            price=p.price,
            category=p.category or "",
            description=p.description or "",
            image=p.image or "",
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "description": self.description,
            "image": self.image,
        }
