from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.auth import Identity, Role


class StaffRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Union[int, str]
    name: str
    email: str
    role: Role
    password_hash: str = Field(repr=False)

    def to_identity(self) -> Identity:
        return Identity(id=self.id, name=self.name, email=self.email, role=self.role.value)
