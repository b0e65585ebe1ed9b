"""Shared test fixtures."""

import pytest

from smsglobal import SmsGlobal

LOGIN_OK = "<resp><ticket>T-1234</ticket></resp>"
LOGIN_REJECTED = '<resp err="Invalid user or password"></resp>'
SEND_OK = "<resp><msgid>6712345</msgid></resp>"
BALANCE_OK = "<resp><balance>42.50</balance><iso_country>AU</iso_country></resp>"


class StubTransport:
    """Records every call and answers from a table of canned replies.

    A reply that is an exception instance is raised instead of returned.
    """

    def __init__(self, replies=None):
        self.replies = {
            "apiValidateLogin": LOGIN_OK,
            "apiSendSms": SEND_OK,
            "apiBalanceCheck": BALANCE_OK,
        }
        self.replies.update(replies or {})
        self.calls = []

    def call(self, operation, params):
        self.calls.append((operation, list(params)))
        reply = self.replies.get(operation, "<resp />")
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def call_count(self):
        return len(self.calls)

    def last_params(self):
        return self.calls[-1][1]


@pytest.fixture
def transport():
    return StubTransport()


@pytest.fixture
def client(transport):
    return SmsGlobal("alice", "s3cret", transport=transport)


@pytest.fixture
def rejecting_transport():
    return StubTransport({"apiValidateLogin": LOGIN_REJECTED})
