# payments/views.py
#
# Purpose:
# - Thin HTTP wrapper around the M-Pesa client.
#
# Contract (used by the booking checkout UI):
#   POST /api/mpesa/stkpush
#   { "phoneNumber": "0712345678", "amount": 500, "accountRef": "BOOKING-42" }
#   -> 200 provider JSON
#   -> 400 { "error": ... } when a field is missing (no provider call)
#   -> 500 { "error": ... } on provider/transport failure
#
import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .mpesa import MpesaClient, MpesaError, whole_amount

log = logging.getLogger(__name__)


class StkPushView(APIView):
    permission_classes = [AllowAny]
    client_class = MpesaClient

    def post(self, request):
        phone = request.data.get("phoneNumber")
        amount = request.data.get("amount")
        account_ref = request.data.get("accountRef")

        if not phone or not amount or not account_ref:
            return Response(
                {"error": "Missing required fields (phoneNumber, amount, accountRef)"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            whole_amount(amount)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        client = self.client_class.from_settings()
        try:
            result = client.initiate_stk_push(phone, amount, account_ref)
        except MpesaError as e:
            log.error("M-Pesa API Route Error Details: %s", e)
            return Response({"error": str(e) or "Internal Server Error"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        log.info("M-Pesa STK push result: %s", result)
        return Response(result)
