from pydantic import BaseModel, ConfigDict


class UserCreate(BaseModel):
    username: str
    password: str


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    password: str
