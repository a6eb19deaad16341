# app/models/ticket.py
from pydantic import BaseModel, Field


class LineItem(BaseModel):
    """
    One line of the running ticket.

    - price is a snapshot of the catalog price at add time
    - quantity never stays at 0: the line is removed instead
    """

    name: str
    price: float
    quantity: int = Field(default=1, ge=1)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity
