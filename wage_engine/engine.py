"""Turns a payroll run definition into per-employee results."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from wage_engine.models import (
    Employee,
    EmployeePayResult,
    PayFrequency,
    PayItem,
    PayRunInput,
    PayRunResult,
)
from wage_engine.tax import FEDERAL_REGION, TaxCalculator, TaxLaw

_HOURS = "hours"

_T = TypeVar("_T")


def _for_region(table: Mapping[str, _T], region: str) -> _T | None:
    found = table.get(region)
    if found is None:
        found = table.get(FEDERAL_REGION)
    return found


def _is_hours(item: PayItem) -> bool:
    return item.description.lower() == _HOURS


def _gross_pay(employee: Employee, items: Sequence[PayItem]) -> float:
    if employee.pay_frequency is PayFrequency.HOURLY:
        hours = next((item.amount for item in items if _is_hours(item)), 0.0)
        base = employee.pay_rate * hours
    else:
        base = employee.pay_rate
    extra = sum((item.amount for item in items if not _is_hours(item)), 0.0)
    return base + extra


def _pay_employee(
    employee: Employee,
    items: Sequence[PayItem],
    tax_laws: Mapping[str, TaxLaw],
    calculators: Mapping[str, TaxCalculator],
) -> EmployeePayResult:
    gross = _gross_pay(employee, items)
    law = _for_region(tax_laws, employee.home_region)
    calculator = _for_region(calculators, employee.home_region)
    if law is not None and calculator is not None:
        taxes = calculator.calculate(employee, gross, law)
    else:
        taxes = 0.0
    details: dict[str, Any] = (
        {"tax_region": law.region, "tax_version": law.version} if law is not None else {}
    )
    return EmployeePayResult(
        employee=employee, gross=gross, taxes=taxes, net=gross - taxes, details=details
    )


def run_payroll(
    pay_input: PayRunInput,
    tax_laws: Mapping[str, TaxLaw],
    calculators: Mapping[str, TaxCalculator],
) -> PayRunResult:
    """Compute gross, taxes and net pay for every employee in ``pay_input``.

    Laws and calculators are looked up by the employee's home region,
    falling back to ``"US-FED"``; without both, no tax is withheld.
    Hourly employees are paid for the first pay item described as
    "hours"; every other item is added to gross pay.
    """
    results = [
        _pay_employee(
            employee, pay_input.pay_items.get(employee.id, []), tax_laws, calculators
        )
        for employee in pay_input.employees
    ]
    return PayRunResult(period=pay_input.pay_period, results=results)