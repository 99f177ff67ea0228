from pydantic import BaseModel


class ApiConfig(BaseModel):
    routers_path: str | None = None
    cors_origins: list[str] | None = None
