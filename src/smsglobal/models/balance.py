from typing import Any

from pydantic import BaseModel


class BalancePayload(BaseModel):
    """Parameters of ``apiBalanceCheck``."""

    ticket: str | None = None
    iso_country: str = "AU"

    def to_params(self) -> list[tuple[str, Any]]:
        return list(self.model_dump().items())
