from typing import Any

from pydantic import BaseModel, ConfigDict


class SMSPayload(BaseModel):
    """Parameters of ``apiSendSms``.

    Field declaration order is the wire order; the gateway rejects
    requests whose fields arrive out of order.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    ticket: str | None = None
    sms_from: str | None = None
    sms_to: str | None = None
    msg_content: str | None = None
    msg_type: str = "text"
    # Deprecated by the gateway, always 0
    unicode: int = 0
    schedule: int | str = 0

    def to_params(self) -> list[tuple[str, Any]]:
        return list(self.model_dump().items())
