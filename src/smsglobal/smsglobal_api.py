import logging
from enum import Enum
from typing import Any, Protocol, Sequence

import requests
from zeep import Client
from zeep.exceptions import Error as ZeepError
from zeep.exceptions import Fault

logger = logging.getLogger("smsglobal")


class TransportError(Exception):
    pass


class RemoteOperation(str, Enum):
    VALIDATE_LOGIN = "apiValidateLogin"
    SEND_SMS = "apiSendSms"
    BALANCE_CHECK = "apiBalanceCheck"


class Transport(Protocol):
    def call(self, operation: str, params: Sequence[tuple[str, Any]]) -> Any: ...


class SoapTransport:
    """zeep client bound to the gateway's service description.

    Parameter values are passed positionally so the remote side receives
    them in exactly the order given.
    """

    def __init__(self, wsdl_url: str) -> None:
        try:
            self._client = Client(wsdl_url)
        except (ZeepError, requests.exceptions.RequestException, OSError, ValueError) as e:
            logger.error(f"Unable to load service description: {e}")
            raise TransportError(f"Unable to load service description: {e}")

    def call(self, operation: str, params: Sequence[tuple[str, Any]]) -> Any:
        try:
            proxy = self._client.service[operation]
        except AttributeError:
            raise TransportError(f"Unknown operation: {operation}")
        except ValueError as e:
            logger.error(f"No usable service in description: {e}")
            raise TransportError(f"No usable service in description: {e}")
        try:
            return proxy(*[value for _, value in params])
        except Fault as e:
            logger.error(f"SOAP fault from {operation}: {e.message}")
            raise TransportError(e.message)
        except (
            ZeepError,
            TypeError,
            ValueError,
            OSError,
            requests.exceptions.RequestException,
        ) as e:
            logger.error(f"Network error: {e}")
            raise TransportError(f"Error in network request: {e}")


class SmsGlobalAPI:
    wsdl_url = "http://www.smsglobal.com/mobileworks/soapserver.php?wsdl"
    default_iso_country = "AU"

    def __init__(self, wsdl_url: str | None = None) -> None:
        if wsdl_url:
            self.wsdl_url = wsdl_url

    def create_transport(self) -> Transport:
        return SoapTransport(self.wsdl_url)
