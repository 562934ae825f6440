"""Data models describing payroll inputs and results."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _get(data: Any, name: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    return data[name]


def _get_str(data: Any, name: str) -> str:
    value = _get(data, name)
    if not isinstance(value, str):
        raise ValueError(f"field `{name}` must be a string")
    return value


def _get_number(data: Any, name: str) -> float:
    value = _get(data, name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field `{name}` must be a number")
    return float(value)


def _get_list(data: Any, name: str) -> list[Any]:
    value = _get(data, name)
    if not isinstance(value, list):
        raise ValueError(f"field `{name}` must be a list")
    return value


class PayFrequency(str, enum.Enum):
    """Whether an employee is paid by the hour or a fixed salary per period."""

    HOURLY = "hourly"
    SALARY = "salary"


@dataclass
class Employee:
    """An employee in the payroll system."""

    id: str
    name: str
    home_region: str
    pay_rate: float
    pay_frequency: PayFrequency

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Employee:
        raw_frequency = _get(data, "pay_frequency")
        try:
            frequency = PayFrequency(raw_frequency)
        except ValueError:
            raise ValueError(f"unknown pay frequency {raw_frequency!r}") from None
        return cls(
            id=_get_str(data, "id"),
            name=_get_str(data, "name"),
            home_region=_get_str(data, "home_region"),
            pay_rate=_get_number(data, "pay_rate"),
            pay_frequency=frequency,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "home_region": self.home_region,
            "pay_rate": self.pay_rate,
            "pay_frequency": self.pay_frequency.value,
        }


@dataclass
class PayItem:
    """An earning (positive amount) or deduction (negative amount)."""

    description: str
    amount: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PayItem:
        return cls(
            description=_get_str(data, "description"),
            amount=_get_number(data, "amount"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"description": self.description, "amount": self.amount}


@dataclass
class PayPeriod:
    """Inclusive start and end dates, as ISO 8601 strings."""

    start: str
    end: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PayPeriod:
        return cls(start=_get_str(data, "start"), end=_get_str(data, "end"))

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start, "end": self.end}


@dataclass
class PayRunInput:
    """Employees, their pay items keyed by employee id, and the pay period."""

    employees: list[Employee]
    pay_items: dict[str, list[PayItem]]
    pay_period: PayPeriod

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PayRunInput:
        raw_items = _get(data, "pay_items")
        if not isinstance(raw_items, Mapping):
            raise ValueError("field `pay_items` must be an object")
        pay_items: dict[str, list[PayItem]] = {}
        for employee_id, items in raw_items.items():
            if not isinstance(items, list):
                raise ValueError(f"pay items for {employee_id!r} must be a list")
            pay_items[str(employee_id)] = [PayItem.from_dict(item) for item in items]
        return cls(
            employees=[Employee.from_dict(e) for e in _get_list(data, "employees")],
            pay_items=pay_items,
            pay_period=PayPeriod.from_dict(_get(data, "pay_period")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "employees": [e.to_dict() for e in self.employees],
            "pay_items": {
                employee_id: [item.to_dict() for item in items]
                for employee_id, items in self.pay_items.items()
            },
            "pay_period": self.pay_period.to_dict(),
        }


@dataclass
class EmployeePayResult:
    """The outcome of a payroll calculation for one employee."""

    employee: Employee
    gross: float
    taxes: float
    net: float
    details: Any = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EmployeePayResult:
        return cls(
            employee=Employee.from_dict(_get(data, "employee")),
            gross=_get_number(data, "gross"),
            taxes=_get_number(data, "taxes"),
            net=_get_number(data, "net"),
            details=_get(data, "details"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee": self.employee.to_dict(),
            "gross": self.gross,
            "taxes": self.taxes,
            "net": self.net,
            "details": self.details,
        }


@dataclass
class PayRunResult:
    """The aggregate result of a payroll run."""

    period: PayPeriod
    results: list[EmployeePayResult]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PayRunResult:
        return cls(
            period=PayPeriod.from_dict(_get(data, "period")),
            results=[EmployeePayResult.from_dict(r) for r in _get_list(data, "results")],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period.to_dict(),
            "results": [r.to_dict() for r in self.results],
        }