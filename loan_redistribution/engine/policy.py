"""Which objective and variable layout each amortization system uses."""

from enum import Enum

from loan_redistribution.models.parameters import AmortizationSystem


class ObjectiveKind(Enum):
    CONSTANT_PAYMENT = "constant_payment"            # principal free, interest = installment - principal
    VARIABLE_PRINCIPAL = "variable_principal"        # principal and interest both free
    CONSTANT_AMORTIZATION = "constant_amortization"  # principal pinned to P/n, interest by recurrence


def select_objective_kind(system: AmortizationSystem, principal_is_constant: bool) -> ObjectiveKind:
    if system is AmortizationSystem.SAC:
        return ObjectiveKind.CONSTANT_AMORTIZATION
    if principal_is_constant:
        return ObjectiveKind.CONSTANT_PAYMENT
    return ObjectiveKind.VARIABLE_PRINCIPAL


def is_joint(kind: ObjectiveKind) -> bool:
    """Whether interest is optimized alongside principal."""
    return kind is ObjectiveKind.VARIABLE_PRINCIPAL


def dimension(kind: ObjectiveKind, installment_count: int) -> int:
    return 2 * installment_count if is_joint(kind) else installment_count


def derives_interest_from_installment(kind: ObjectiveKind) -> bool:
    """Interest column is installment - rounded principal, not an optimizer output."""
    return kind is ObjectiveKind.CONSTANT_PAYMENT
