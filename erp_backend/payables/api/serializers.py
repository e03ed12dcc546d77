# payables/api/serializers.py

"""
Wire format of the payable creation endpoint.

Field names follow the front-end contract (Portuguese camelCase); `source=`
maps them to the service's English names. Empty strings sent for optional
ids, dates and numbers are read as null.
"""

from decimal import ROUND_HALF_UP, Decimal

from rest_framework import serializers

from payables.models import Installment, PayableDocument
from payables.services.inputs import (
    AllocationInput,
    InstallmentInput,
    PayableHeader,
    PayableInput,
)
from payables.services.rounding import TWOPLACES

FOURPLACES = Decimal("0.0001")


class BlankAsNullMixin:
    def validate_empty_values(self, data):
        if isinstance(data, str) and not data.strip():
            data = None
        return super().validate_empty_values(data)


class OptionalUUIDField(BlankAsNullMixin, serializers.UUIDField):
    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_null", True)
        super().__init__(**kwargs)


class OptionalDateField(BlankAsNullMixin, serializers.DateField):
    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_null", True)
        super().__init__(**kwargs)


class OptionalMoneyField(BlankAsNullMixin, serializers.DecimalField):
    """
    Any precision is accepted (the UI sends unrounded floats such as
    333.3333333333333); the value is rounded half up to `places`.
    """

    places = TWOPLACES
    column_digits = 14

    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_null", True)
        kwargs.setdefault("max_digits", None)
        kwargs.setdefault("decimal_places", None)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data).quantize(self.places, rounding=ROUND_HALF_UP)
        if len(value.as_tuple().digits) > self.column_digits:
            self.fail("max_digits", max_digits=self.column_digits)
        return value


class OptionalPercentField(OptionalMoneyField):
    places = FOURPLACES
    column_digits = 9


def _optional_text(source, max_length=None):
    return serializers.CharField(
        source=source,
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=max_length,
    )


class InstallmentInputSerializer(serializers.Serializer):
    tituloParcela = _optional_text("title", max_length=255)
    dataVencimento = OptionalDateField(source="due_date")
    dataPagamento = OptionalDateField(source="payment_date")
    dataCompensacao = OptionalDateField(source="clearing_date")
    valorParcela = OptionalMoneyField(source="installment_value")
    diferenca = OptionalMoneyField(source="difference")
    valorTotal = OptionalMoneyField(source="total_value")
    status = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    formaPagamentoId = OptionalUUIDField(source="payment_method_id")
    contaCorrenteId = OptionalUUIDField(source="bank_account_id")

    def validate_status(self, value):
        normalized = (value or "").strip().lower() or Installment.STATUS_PENDING
        allowed = {choice for choice, _ in Installment.STATUSES}
        if normalized not in allowed:
            raise serializers.ValidationError(f"Must be one of: {', '.join(sorted(allowed))}.")
        return normalized


class AccountAllocationSerializer(serializers.Serializer):
    contaContabilId = OptionalUUIDField(source="target_id")
    valor = OptionalMoneyField(source="value")
    percentual = OptionalPercentField(source="percent")


class CostCenterAllocationSerializer(serializers.Serializer):
    centroCustoId = OptionalUUIDField(source="target_id")
    valor = OptionalMoneyField(source="value")
    percentual = OptionalPercentField(source="percent")


class PayableCreateSerializer(serializers.Serializer):
    titulo = _optional_text("title", max_length=255)
    cadastroId = OptionalUUIDField(source="counterparty_id")
    # Legacy alias of cadastroId.
    cadastro = OptionalUUIDField(source="legacy_counterparty_id")
    valorTotal = OptionalMoneyField(source="total_value")
    contaContabil = OptionalUUIDField(source="chart_of_account_id")
    centroCusto = OptionalUUIDField(source="cost_center_id")
    dataEmissao = OptionalDateField(source="issue_date")
    dataQuitacao = OptionalDateField(source="settlement_date")
    competencia = _optional_text("period", max_length=20)
    origem = _optional_text("origin", max_length=100)
    observacoes = _optional_text("notes")
    status = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    companyId = OptionalUUIDField(source="company_id")
    parcelamentoId = OptionalUUIDField(source="installment_plan_id")
    # Legacy alias of parcelamentoId.
    parcelamento = OptionalUUIDField(source="legacy_installment_plan_id")

    parcelas = InstallmentInputSerializer(
        many=True, required=False, allow_null=True, source="installments"
    )
    rateioContaContabil = AccountAllocationSerializer(
        many=True, required=False, allow_null=True, source="account_allocations"
    )
    rateioCentroCusto = CostCenterAllocationSerializer(
        many=True, required=False, allow_null=True, source="cost_center_allocations"
    )

    def validate_status(self, value):
        normalized = (value or "").strip().upper() or PayableDocument.STATUS_PENDING
        allowed = {choice for choice, _ in PayableDocument.STATUSES}
        if normalized not in allowed:
            raise serializers.ValidationError(f"Must be one of: {', '.join(sorted(allowed))}.")
        return normalized

    def to_input(self) -> PayableInput:
        data = self.validated_data

        header = PayableHeader(
            title=data.get("title"),
            counterparty_id=data.get("counterparty_id") or data.get("legacy_counterparty_id"),
            total_value=data.get("total_value"),
            issue_date=data.get("issue_date"),
            company_id=data.get("company_id"),
            chart_of_account_id=data.get("chart_of_account_id"),
            cost_center_id=data.get("cost_center_id"),
            settlement_date=data.get("settlement_date"),
            period=data.get("period") or "",
            origin=data.get("origin") or "",
            notes=data.get("notes") or "",
            status=data.get("status") or PayableDocument.STATUS_PENDING,
            installment_plan_id=(
                data["installment_plan_id"]
                if data.get("installment_plan_id") is not None
                else data.get("legacy_installment_plan_id")
            ),
        )

        installments = tuple(
            InstallmentInput(
                title=item.get("title") or "",
                due_date=item.get("due_date"),
                payment_date=item.get("payment_date"),
                clearing_date=item.get("clearing_date"),
                installment_value=item.get("installment_value"),
                difference=item.get("difference"),
                total_value=item.get("total_value"),
                status=item.get("status") or Installment.STATUS_PENDING,
                payment_method_id=item.get("payment_method_id"),
                bank_account_id=item.get("bank_account_id"),
            )
            for item in (data.get("installments") or [])
        )

        return PayableInput(
            header=header,
            installments=installments,
            account_allocations=self._allocations(data.get("account_allocations")),
            cost_center_allocations=self._allocations(data.get("cost_center_allocations")),
        )

    @staticmethod
    def _allocations(items) -> tuple[AllocationInput, ...]:
        return tuple(
            AllocationInput(
                target_id=item.get("target_id"),
                value=item.get("value"),
                percent=item.get("percent"),
            )
            for item in (items or [])
        )


class PayableCreatedSerializer(serializers.Serializer):
    document_id = serializers.UUIDField()
    message = serializers.CharField()
