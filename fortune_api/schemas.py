from pydantic import BaseModel


class Health(BaseModel):
    status: str = "ok"
    categories: int


class Version(BaseModel):
    version: str
