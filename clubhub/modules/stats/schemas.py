from pydantic import BaseModel


class StatsResponse(BaseModel):
    total_events: int = 0
    total_tickets: int = 0
    validated_tickets: int = 0
    total_revenue: float = 0
    tickets_scanned: int = 0
    revenue: float = 0
