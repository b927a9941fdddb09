"""
API Layer — Chaincode Invocation Endpoints (Django REST Framework)

Thin controllers in front of EnergyTradingChaincode. Their responsibilities
are limited to:

- Validating the request envelope (function name, list of string args)
- Running the invocation inside transaction.atomic(), marked for rollback
  when it fails, as a peer discards the write set of a failed transaction
- Translating chaincode errors into HTTP status codes

No argument parsing or record rules live here.
"""

import json
import logging

from django.db import transaction
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from energy_trading.application.chaincode import EnergyTradingChaincode
from energy_trading.domain.exceptions import (
    ArityError,
    InvalidInitialState,
    MalformedRecord,
    NotFound,
    ParseError,
    PersistenceError,
    ReferenceNotFound,
    UnknownFunction,
)
from energy_trading.ledger import get_ledger

logger = logging.getLogger(__name__)

ERROR_STATUS = (
    (ArityError, status.HTTP_400_BAD_REQUEST),
    (ParseError, status.HTTP_400_BAD_REQUEST),
    (UnknownFunction, status.HTTP_400_BAD_REQUEST),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (ReferenceNotFound, status.HTTP_404_NOT_FOUND),
    (InvalidInitialState, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (MalformedRecord, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (PersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def http_status_for(error):
    for error_type, http_status in ERROR_STATUS:
        if isinstance(error, error_type):
            return http_status
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _bad_request(message):
    return Response({"error": message}, status=status.HTTP_400_BAD_REQUEST)


def _valid_args(args):
    return isinstance(args, list) and all(isinstance(arg, str) for arg in args)


class ChaincodeView(APIView):

    def get_chaincode(self):
        return EnergyTradingChaincode(get_ledger())

    def run(self, chaincode, function, args):
        with transaction.atomic():
            result = chaincode.invoke(function, args)
            if not result.ok:
                transaction.set_rollback(True)

        if not result.ok:
            return Response(
                {
                    "status": result.status,
                    "message": result.message,
                    "error": type(result.error).__name__,
                },
                status=http_status_for(result.error),
            )

        payload = None if result.payload is None else result.payload.decode("utf-8", errors="replace")
        return Response(
            {"status": result.status, "message": result.message, "payload": payload},
            status=status.HTTP_200_OK,
        )


class InvokeView(ChaincodeView):
    """
    POST /api/chaincode/invoke/

    Body: {"function": "RegisterOrder", "args": ["1", "0", ...]}
    """

    def post(self, request):
        if not isinstance(request.data, dict):
            return _bad_request("request body must be a JSON object.")

        function = request.data.get("function")
        args = request.data.get("args", [])

        if not isinstance(function, str) or not function:
            return _bad_request("function is required.")
        if not _valid_args(args):
            return _bad_request("args must be a list of strings.")

        logger.debug("Invoke request: function=%s argc=%s", function, len(args))
        return self.run(self.get_chaincode(), function, args)


class QueryView(ChaincodeView):
    """
    GET /api/chaincode/query/?function=ReadOrder&args=["4"]

    Read functions only; args is a JSON-encoded list of strings.
    """

    def get(self, request):
        function = request.query_params.get("function")
        raw_args = request.query_params.get("args", "[]")

        if not function:
            return _bad_request("function is required.")

        chaincode = self.get_chaincode()
        if function not in chaincode.read_functions():
            return _bad_request(f"{function} is not a read function.")

        try:
            args = json.loads(raw_args)
        except ValueError:
            return _bad_request("args must be a JSON-encoded list of strings.")
        if not _valid_args(args):
            return _bad_request("args must be a JSON-encoded list of strings.")

        return self.run(chaincode, function, args)
