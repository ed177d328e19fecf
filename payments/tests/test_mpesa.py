# payments/tests/test_mpesa.py

import base64
from datetime import datetime
from unittest import mock

import requests
from django.test import SimpleTestCase, TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from payments.mpesa import (
    BUY_GOODS,
    PAYBILL,
    MpesaClient,
    MpesaError,
    make_timestamp,
    normalize_phone,
    whole_amount,
)
from payments.views import StkPushView


def _response(status_code=200, json_data=None, text=""):
    resp = mock.Mock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.json.return_value = json_data or {}
    resp.text = text
    return resp


def _client(**kw):
    defaults = {
        "consumer_key": "key",
        "consumer_secret": "secret",
        "shortcode": "174379",
        "passkey": "pk",
        "callback_url": "https://example.com/cb",
        "receiver_number": "0707444525",
        "session": mock.Mock(),
    }
    defaults.update(kw)
    return MpesaClient(**defaults)


class HelperTests(SimpleTestCase):
    def test_normalize_phone(self):
        self.assertEqual(normalize_phone("0712345678"), "254712345678")
        self.assertEqual(normalize_phone("+254712345678"), "254712345678")
        self.assertEqual(normalize_phone("254712345678"), "254712345678")
        self.assertEqual(normalize_phone("712345678"), "254712345678")
        self.assertEqual(normalize_phone("0712 345-678"), "254712345678")

    def test_whole_amount(self):
        self.assertEqual(whole_amount("500"), 500)
        self.assertEqual(whole_amount(499.5), 500)
        self.assertEqual(whole_amount("100.4"), 100)
        with self.assertRaises(ValueError):
            whole_amount("abc")

    def test_whole_amount_rejects_non_finite(self):
        for bad in ("Infinity", "-Infinity", "NaN", float("inf"), "1e999999"):
            with self.assertRaises(ValueError, msg=repr(bad)):
                whole_amount(bad)

    def test_timestamp_format(self):
        now = timezone.make_aware(datetime(2025, 6, 10, 9, 5, 7))
        self.assertEqual(make_timestamp(now), "20250610090507")


class SimulatorTests(SimpleTestCase):
    def test_no_credentials_never_touches_network(self):
        session = mock.Mock()
        client = MpesaClient(consumer_key="", consumer_secret="", session=session)
        self.assertTrue(client.simulated)

        result = client.initiate_stk_push("0712345678", 500, "BOOKING-42")

        self.assertEqual(result["ResponseCode"], "0")
        self.assertEqual(result["MerchantRequestID"], "SIM-BOOKING-42")
        session.get.assert_not_called()
        session.post.assert_not_called()

    def test_one_missing_credential_is_simulated(self):
        self.assertTrue(MpesaClient(consumer_key="key", consumer_secret="").simulated)


class PayloadTests(SimpleTestCase):
    def test_paybill_payload(self):
        client = _client()
        payload = client.build_payload("0712345678", "500.4", "BOOKING-42", timestamp="20250610090507")

        self.assertEqual(payload["TransactionType"], PAYBILL)
        self.assertEqual(payload["PartyB"], "174379")
        self.assertEqual(payload["PartyA"], "254712345678")
        self.assertEqual(payload["PhoneNumber"], "254712345678")
        self.assertEqual(payload["Amount"], 500)
        self.assertEqual(payload["Timestamp"], "20250610090507")
        self.assertEqual(
            base64.b64decode(payload["Password"]).decode(),
            "174379pk20250610090507",
        )
        self.assertEqual(payload["TransactionDesc"], "Payment for BOOKING-42 to 0707444525")

    def test_till_number_switches_to_buy_goods(self):
        payload = _client(till_number="555111").build_payload("0712345678", 100, "REF")
        self.assertEqual(payload["TransactionType"], BUY_GOODS)
        self.assertEqual(payload["PartyB"], "555111")
        self.assertEqual(payload["BusinessShortCode"], "174379")

    def test_production_base_url(self):
        self.assertIn("api.safaricom", _client(env="production").base_url)
        self.assertIn("sandbox", _client().base_url)


class StkPushFlowTests(SimpleTestCase):
    def test_success(self):
        client = _client()
        client.session.get.return_value = _response(json_data={"access_token": "tok"})
        client.session.post.return_value = _response(json_data={"ResponseCode": "0", "CheckoutRequestID": "ws_1"})

        result = client.initiate_stk_push("0712345678", 500, "BOOKING-42")

        self.assertEqual(result["CheckoutRequestID"], "ws_1")
        _, kwargs = client.session.post.call_args
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer tok")
        _, get_kwargs = client.session.get.call_args
        self.assertEqual(get_kwargs["auth"], ("key", "secret"))

    def test_token_failure_raises(self):
        client = _client()
        client.session.get.return_value = _response(401, text="invalid credentials")
        with self.assertRaisesMessage(MpesaError, "invalid credentials"):
            client.initiate_stk_push("0712345678", 500, "REF")
        client.session.post.assert_not_called()

    def test_provider_error_body_is_surfaced(self):
        client = _client()
        client.session.get.return_value = _response(json_data={"access_token": "tok"})
        client.session.post.return_value = _response(400, text='{"errorMessage": "Bad Request - Invalid PhoneNumber"}')

        with self.assertLogs("payments.mpesa", level="ERROR") as logs:
            with self.assertRaisesMessage(MpesaError, "Invalid PhoneNumber"):
                client.initiate_stk_push("0712345678", 500, "REF")
        self.assertFalse(any("Password" in line for line in logs.output))

    def test_transport_error_is_wrapped(self):
        client = _client()
        client.session.get.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaisesMessage(MpesaError, "connection refused"):
            client.initiate_stk_push("0712345678", 500, "REF")


@override_settings(MPESA_CONSUMER_KEY="", MPESA_CONSUMER_SECRET="")
class StkPushEndpointTests(TestCase):
    url = "/api/mpesa/stkpush"

    def setUp(self):
        self.client = APIClient()

    def test_missing_account_ref_is_400_without_provider_call(self):
        with mock.patch.object(MpesaClient, "initiate_stk_push") as push:
            resp = self.client.post(self.url, {"phoneNumber": "0712345678", "amount": 500}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("error", resp.data)
        push.assert_not_called()

    def test_bad_amount_is_400(self):
        resp = self.client.post(
            self.url, {"phoneNumber": "0712345678", "amount": "lots", "accountRef": "R1"}, format="json"
        )
        self.assertEqual(resp.status_code, 400)

    def test_non_finite_amount_is_400(self):
        for amount in ("Infinity", "NaN", "1e999999"):
            resp = self.client.post(
                self.url, {"phoneNumber": "0712345678", "amount": amount, "accountRef": "R1"}, format="json"
            )
            self.assertEqual(resp.status_code, 400, amount)
            self.assertIn("error", resp.data)

    def test_overflowing_json_number_is_400(self):
        body = '{"phoneNumber": "0712345678", "amount": 1e400, "accountRef": "R1"}'
        with mock.patch.object(MpesaClient, "initiate_stk_push") as push:
            resp = self.client.post(self.url, body, content_type="application/json")
        self.assertEqual(resp.status_code, 400)
        push.assert_not_called()

    def test_simulated_success(self):
        resp = self.client.post(
            self.url, {"phoneNumber": "0712345678", "amount": 500, "accountRef": "BOOKING-42"}, format="json"
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["ResponseCode"], "0")

    def test_provider_failure_is_500(self):
        with mock.patch.object(StkPushView.client_class, "initiate_stk_push", side_effect=MpesaError("boom 503")):
            resp = self.client.post(
                self.url, {"phoneNumber": "0712345678", "amount": 500, "accountRef": "R1"}, format="json"
            )
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.data["error"], "boom 503")
