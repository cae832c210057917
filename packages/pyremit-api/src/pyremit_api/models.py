from pydantic import BaseModel


class FieldUpdate(BaseModel):
    name: str
    value: str | int | float | None = None
