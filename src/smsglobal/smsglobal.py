import logging
from enum import Enum
from typing import Any, Callable, Mapping, Sequence, TypeVar, cast
from xml.parsers.expat import ExpatError

import xmltodict
from pydantic import ValidationError

from smsglobal.models.balance import BalancePayload
from smsglobal.models.credentials import Credentials
from smsglobal.models.sms_model import SMSPayload
from smsglobal.models.smsglobal import ErrorKind, SmsGlobalResponse
from smsglobal.smsglobal_api import (
    RemoteOperation,
    SmsGlobalAPI,
    Transport,
    TransportError,
)

AUTHENTICATION_FAILED = "Failed to validate"


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("smsglobal")


class LocalOperation(str, Enum):
    GET_TICKET_ID = "getTicketId"
    SEND_SMS = "sendSms"
    CHECK_BALANCE = "checkBalance"
    GET_ERROR = "getError"


Params = Mapping[str, Any] | Sequence[tuple[str, Any]]

T = TypeVar("T", bound=Callable[..., Any])


def error_gate(func: T) -> T:
    """Refuse remote calls while an error is unacknowledged or no transport exists."""

    def wrapper(self: "SmsGlobal", *args: Any, **kwargs: Any) -> Any:
        if self._error or self._transport is None:
            reason = self._error or "No transport available"
            logger.warning(f"Remote call skipped: {reason}")
            return SmsGlobalResponse(
                status="error", message=reason, error=ErrorKind.GATED
            )
        return func(self, *args, **kwargs)

    return cast(T, wrapper)


def _resp_node(data: Any) -> dict[str, Any]:
    if isinstance(data, Mapping):
        node = data.get("resp")
        if isinstance(node, Mapping):
            return dict(node)
    return {}


def _is_error_flag(err: Any) -> bool:
    # the gateway marks successful replies with err="0"
    return err not in (None, "", "0", 0)


class SmsGlobal(SmsGlobalAPI):
    """Client for the SMS Global SOAP gateway.

    Authenticates on construction and keeps the session ticket. Every
    failure is recorded as the client's last error, and while that error is
    set no further remote call is made until it is cleared with
    ``set_error(None)``. Clearing does not re-authenticate.

    Ticket and error state are mutated in place by every call, so an
    instance must not be shared between threads without external locking.
    """

    def __init__(
        self,
        user: str,
        password: str,
        wsdl_url: str | None = None,
        transport: Transport | None = None,
    ) -> None:
        super().__init__(wsdl_url)
        self._credentials = Credentials(user=user, password=password)
        self._ticket_id: str | None = None
        self._error: str | None = None
        self._transport = transport

        if self._transport is None:
            try:
                self._transport = self.create_transport()
            except TransportError as e:
                self.set_error(str(e))
                return
        self.authenticate()

    @classmethod
    def from_config(
        cls, config: Mapping[str, Any], transport: Transport | None = None
    ) -> "SmsGlobal":
        return cls(
            user=config["user"],
            password=config["password"],
            wsdl_url=config.get("wsdl_url"),
            transport=transport,
        )

    def authenticate(self) -> SmsGlobalResponse:
        if self._ticket_id:
            return SmsGlobalResponse("success", "Using existing ticket")

        res = self._call_remote(
            RemoteOperation.VALIDATE_LOGIN.value, self._credentials.to_params()
        )
        if not res and res.error is not ErrorKind.APPLICATION:
            return res

        ticket = _resp_node(res.data).get("ticket")
        if not res or not ticket:
            logger.error(f"Unable to validate user {self._credentials.user}")
            self.set_error(AUTHENTICATION_FAILED)
            return SmsGlobalResponse(
                status="error",
                message=AUTHENTICATION_FAILED,
                data=res.data,
                error=ErrorKind.AUTHENTICATION,
            )

        self._ticket_id = str(ticket)
        logger.info(f"Logged in as {self._credentials.user}")
        return SmsGlobalResponse(
            status="success",
            message=f"Logged in as {self._credentials.user}",
            data=res.data,
        )

    def get_ticket_id(self) -> str | None:
        return self._ticket_id

    def get_error(self) -> str | None:
        return self._error

    def set_error(self, error: str | None = None) -> str | None:
        """Set the last error. An empty value clears it and lets remote calls through again."""
        self._error = error or None
        return error

    def invoke(self, operation: str, params: Any = None) -> Any:
        """Run a named operation.

        ``getTicketId``, ``sendSms``, ``checkBalance`` and ``getError`` are
        served locally by the matching method. Any other name is forwarded
        verbatim to the gateway with ``params`` in their given order.
        """
        try:
            local = LocalOperation(operation)
        except ValueError:
            return self._call_remote(operation, params)

        if local is LocalOperation.GET_TICKET_ID:
            return self.get_ticket_id()
        if local is LocalOperation.SEND_SMS:
            return self.send_sms(params)
        if local is LocalOperation.CHECK_BALANCE:
            if isinstance(params, Mapping):
                params = params.get("iso_country")
            return self.check_balance(params)
        return self.get_error()

    @error_gate
    def send_sms(self, params: Mapping[str, Any] | None = None) -> SmsGlobalResponse:
        if params is not None and not isinstance(params, Mapping):
            message = f"Invalid SMS parameters: expected a mapping, got {type(params).__name__}"
            logger.error(message)
            self.set_error(message)
            return SmsGlobalResponse(
                status="error", message=message, error=ErrorKind.VALIDATION
            )

        fields = dict(params or {})
        if fields.get("schedule") is None:
            fields.pop("schedule", None)
        fields.pop("msg_type", None)
        fields.pop("unicode", None)
        fields["ticket"] = self._ticket_id

        try:
            payload = SMSPayload.model_validate(fields)
        except ValidationError as e:
            return self._validation_failure(e)
        return self.invoke(RemoteOperation.SEND_SMS.value, payload.to_params())

    @error_gate
    def check_balance(self, iso_country: str | None = None) -> SmsGlobalResponse:
        try:
            payload = BalancePayload(
                ticket=self._ticket_id,
                iso_country=iso_country or self.default_iso_country,
            )
        except ValidationError as e:
            return self._validation_failure(e)
        return self.invoke(RemoteOperation.BALANCE_CHECK.value, payload.to_params())

    def parse_response(self, raw: Any) -> SmsGlobalResponse:
        if not isinstance(raw, (str, bytes)):
            message = f"Unable to parse response: unexpected payload {type(raw).__name__}"
            logger.error(message)
            self.set_error(message)
            return SmsGlobalResponse(status="error", message=message, error=ErrorKind.PARSE)

        try:
            data = xmltodict.parse(raw)
        except ExpatError as e:
            message = f"Unable to parse response: {e}"
            logger.error(message)
            self.set_error(message)
            return SmsGlobalResponse(
                status="error", message=message, data=raw, error=ErrorKind.PARSE
            )
        return SmsGlobalResponse(status="success", message="Response parsed", data=data)

    @error_gate
    def _call_remote(self, operation: str, params: Params | None) -> SmsGlobalResponse:
        if isinstance(params, Mapping):
            ordered = list(params.items())
        else:
            ordered = list(params or [])

        try:
            raw = self._transport.call(operation, ordered)
        except TransportError as e:
            self.set_error(str(e))
            return SmsGlobalResponse(
                status="error", message=str(e), error=ErrorKind.TRANSPORT
            )

        res = self.parse_response(raw)
        if not res:
            return res

        err = _resp_node(res.data).get("@err")
        if _is_error_flag(err):
            logger.error(f"Error from server on {operation}: {err}")
            self.set_error(str(err))
            return SmsGlobalResponse(
                status="error",
                message=str(err),
                data=res.data,
                error=ErrorKind.APPLICATION,
            )
        return SmsGlobalResponse(
            status="success", message=f"{operation} succeeded", data=res.data
        )

    def _validation_failure(self, e: ValidationError) -> SmsGlobalResponse:
        logger.error(f"Validation error: {e.errors()}")
        errors = e.errors(include_url=False, include_input=False)
        message = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in errors
        )
        self.set_error(message)
        return SmsGlobalResponse(
            status="error", message=errors, error=ErrorKind.VALIDATION
        )
