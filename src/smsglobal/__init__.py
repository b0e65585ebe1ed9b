from smsglobal.models.smsglobal import ErrorKind, SmsGlobalResponse
from smsglobal.smsglobal import LocalOperation, SmsGlobal
from smsglobal.smsglobal_api import RemoteOperation, SoapTransport, TransportError

__all__ = [
    "ErrorKind",
    "LocalOperation",
    "RemoteOperation",
    "SmsGlobal",
    "SmsGlobalResponse",
    "SoapTransport",
    "TransportError",
]
