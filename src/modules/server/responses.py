from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    status: str
    message: str
    data: Any = None

class HealthResponse(BaseModel):
    status: str = "ok"
