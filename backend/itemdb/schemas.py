from pydantic import BaseModel


class Item(BaseModel):
    name: str
    price: float


class Health(BaseModel):
    status: str
    version: str
