import logging
import unittest
from unittest.mock import MagicMock

import pytest

from litewire import Container, factory, raw


class PaymentGateway:
    def pay(self, amount_usd: float, reference: str) -> bool:
        return True


class PaymentClient:
    def __init__(self, gateway: PaymentGateway, log: logging.Logger, usd_per_cent: float = 0.01) -> None:
        self._gateway = gateway
        self._log = log
        self._usd_per_cent = usd_per_cent

    def charge(self, order_id: str, amount_cents: int) -> None:
        self._log.info("charging %s through gateway", order_id)
        self._gateway.pay(amount_cents * self._usd_per_cent, reference=order_id)


class CheckoutSession:
    def __init__(self, client: PaymentClient) -> None:
        self.client = client


class TestWiringPaymentClient(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.gateway = MagicMock(spec=PaymentGateway)
        self.log = MagicMock(spec=logging.Logger)

        self.cont = Container(
            {
                "usd_per_cent": 0.0125,
                "gateway": self.gateway,
                "log": self.log,
                "payment_client": lambda c: PaymentClient(c["gateway"], c["log"], c["usd_per_cent"]),
                "checkout": factory(lambda c: CheckoutSession(c["payment_client"])),
            }
        )

    def test_client_built_from_registered_parts(self):
        client = self.cont["payment_client"]
        client.charge("order-123", 5000)

        self.gateway.pay.assert_called_once_with(0.0125 * 5000, reference="order-123")
        self.log.info.assert_called_once()
        assert "gateway" in self.log.info.call_args[0][0]

    def test_sessions_are_fresh_but_share_the_client(self):
        s1 = self.cont["checkout"]
        s2 = self.cont["checkout"]

        assert s1 is not s2
        assert s1.client is s2.client
        assert isinstance(s1.client, PaymentClient)

    def test_client_keeps_configuration_seen_at_resolution(self):
        self.cont["usd_per_cent"] = 0.02
        client = self.cont["payment_client"]
        self.cont["usd_per_cent"] = 0.05
        client.charge("order-7", 100)

        assert self.gateway.pay.call_args[0][0] == 100 * 0.02

    def test_client_builder_injected_raw(self):
        build = MagicMock(side_effect=lambda gateway: PaymentClient(gateway, self.log))
        self.cont.raw("build_client", build)

        made = self.cont["build_client"](self.gateway)

        assert isinstance(made, PaymentClient)
        build.assert_called_once_with(self.gateway)


def test_debug_logging_for_registration_and_resolution(caplog: pytest.LogCaptureFixture):
    c = Container()
    with caplog.at_level(logging.DEBUG, logger="litewire"):
        c["db"] = lambda: "conn"
        c.alias("database", "db")
        c["database"]

    messages = [r.getMessage() for r in caplog.records]
    assert "Registered lazy entry 'db'" in messages
    assert "Aliased 'database' to 'db'" in messages
    assert "Resolved 'db' to str" in messages


def test_raw_mock_not_called_by_container():
    c = Container()
    fn = MagicMock()
    c["fn"] = raw(fn)

    assert c["fn"] is fn
    fn.assert_not_called()
