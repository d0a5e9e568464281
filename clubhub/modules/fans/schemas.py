from pydantic import BaseModel


class FanResponse(BaseModel):
    name: str
    email: str
    total_tickets: int = 0
    money_spent: float = 0
    has_valid_subscription: bool = False
