# catalog_service/models.py
from pydantic import BaseModel
from typing import Optional

class Product(BaseModel):
    id: str
    name: str
    price: float
    category: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None

class DeleteAck(BaseModel):
    message: str = "Product deleted"
