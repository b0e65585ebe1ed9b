from typing import Any

from pydantic import BaseModel, ConfigDict


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: str
    password: str

    def to_params(self) -> list[tuple[str, Any]]:
        return [("user", self.user), ("password", self.password)]

    def __repr__(self) -> str:
        return f"Credentials(user={self.user!r})"
