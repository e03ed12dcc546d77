# payables/api/views.py

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from payables.api.serializers import PayableCreatedSerializer, PayableCreateSerializer
from payables.services.exceptions import PayableTransactionError, PayableValidationError
from payables.services.payable_service import create_payable

CREATED_MESSAGE = "Conta a pagar salva com sucesso"


def error_response(*, code: str, message: str, http_status: int, fields=None):
    """
    Canonical API error response.
    """
    body = {"code": code, "message": message}
    if fields:
        body["fields"] = fields
    return Response({"error": body}, status=http_status)


class PayableCreateView(GenericAPIView):
    """
    Create an accounts-payable document with installments and allocations.

    One request = one database transaction. Paid installments with a bank
    account produce ledger outflows; re-sending the same installment never
    produces a second movement.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = PayableCreateSerializer

    @extend_schema(
        tags=["payables"],
        request=PayableCreateSerializer,
        responses={
            201: PayableCreatedSerializer,
            400: OpenApiResponse(description="Missing or invalid fields"),
            500: OpenApiResponse(description="Transaction rolled back"),
        },
    )
    def post(self, request):
        s = self.get_serializer(data=request.data)
        if not s.is_valid():
            return error_response(
                code="validation_error",
                message="Invalid payable data",
                http_status=status.HTTP_400_BAD_REQUEST,
                fields=s.errors,
            )

        try:
            result = create_payable(s.to_input(), user=request.user)
        except PayableValidationError as exc:
            return error_response(
                code="validation_error",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
                fields=exc.errors,
            )
        except PayableTransactionError as exc:
            return error_response(
                code="internal_error",
                message=f"Internal server error: {exc}",
                http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {"document_id": str(result.document_id), "message": CREATED_MESSAGE},
            status=status.HTTP_201_CREATED,
        )
