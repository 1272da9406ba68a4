from pydantic import BaseModel

class CreatedId(BaseModel):
    id: int

class Success(BaseModel):
    success: bool = True
