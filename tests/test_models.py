import json

import pytest

from wage_engine.models import (
    Employee,
    EmployeePayResult,
    PayFrequency,
    PayItem,
    PayPeriod,
    PayRunInput,
    PayRunResult,
)


def _employee_dict(**overrides):
    data = {
        "id": "1",
        "name": "Test",
        "home_region": "US-OK",
        "pay_rate": 100.0,
        "pay_frequency": "salary",
    }
    data.update(overrides)
    return data


def test_pay_frequency_wire_values():
    assert PayFrequency("hourly") is PayFrequency.HOURLY
    assert PayFrequency("salary") is PayFrequency.SALARY


def test_employee_from_dict_fields():
    employee = Employee.from_dict(_employee_dict())
    assert employee.id == "1"
    assert employee.home_region == "US-OK"
    assert employee.pay_rate == 100.0
    assert employee.pay_frequency is PayFrequency.SALARY


def test_employee_round_trip():
    data = _employee_dict(pay_frequency="hourly")
    assert Employee.from_dict(data).to_dict() == data


def test_employee_integer_rate_becomes_float():
    employee = Employee.from_dict(_employee_dict(pay_rate=25))
    assert isinstance(employee.pay_rate, float)
    assert employee.pay_rate == 25


def test_employee_to_dict_is_json_serialisable():
    employee = Employee.from_dict(_employee_dict())
    text = json.dumps(employee.to_dict())
    assert Employee.from_dict(json.loads(text)) == employee


def test_employee_unknown_frequency_rejected():
    with pytest.raises(ValueError):
        Employee.from_dict(_employee_dict(pay_frequency="Weekly"))


def test_employee_missing_field_rejected():
    data = _employee_dict()
    del data["home_region"]
    with pytest.raises(ValueError, match="home_region"):
        Employee.from_dict(data)


@pytest.mark.parametrize("rate", ["100", True, None])
def test_employee_non_numeric_rate_rejected(rate):
    with pytest.raises(ValueError):
        Employee.from_dict(_employee_dict(pay_rate=rate))


def test_employee_from_non_mapping_rejected():
    with pytest.raises(ValueError):
        Employee.from_dict(["1", "Test"])


def test_pay_item_round_trip():
    data = {"description": "bonus", "amount": -12.5}
    item = PayItem.from_dict(data)
    assert item.amount == -12.5
    assert item.to_dict() == data


def test_pay_period_round_trip():
    data = {"start": "2025-01-01", "end": "2025-01-15"}
    assert PayPeriod.from_dict(data).to_dict() == data


def test_pay_period_missing_end_rejected():
    with pytest.raises(ValueError, match="end"):
        PayPeriod.from_dict({"start": "2025-01-01"})


def test_pay_run_input_round_trip():
    data = {
        "employees": [_employee_dict(), _employee_dict(id="2", pay_frequency="hourly")],
        "pay_items": {"2": [{"description": "hours", "amount": 40.0}]},
        "pay_period": {"start": "2025-01-01", "end": "2025-01-15"},
    }
    run = PayRunInput.from_dict(data)
    assert [e.id for e in run.employees] == ["1", "2"]
    assert run.pay_items["2"][0].description == "hours"
    assert run.to_dict() == data


def test_pay_run_input_requires_pay_items():
    with pytest.raises(ValueError, match="pay_items"):
        PayRunInput.from_dict(
            {"employees": [], "pay_period": {"start": "a", "end": "b"}}
        )


def test_pay_run_input_pay_items_must_be_lists():
    with pytest.raises(ValueError):
        PayRunInput.from_dict(
            {
                "employees": [],
                "pay_items": {"1": {"description": "x", "amount": 1}},
                "pay_period": {"start": "a", "end": "b"},
            }
        )


def test_pay_run_result_round_trip():
    data = {
        "period": {"start": "2025-01-01", "end": "2025-01-15"},
        "results": [
            {
                "employee": _employee_dict(),
                "gross": 100.0,
                "taxes": 10.0,
                "net": 90.0,
                "details": {"tax_region": "US-FED", "tax_version": "2025"},
            }
        ],
    }
    result = PayRunResult.from_dict(data)
    assert result.results[0].details["tax_region"] == "US-FED"
    assert result.to_dict() == data


def test_employee_pay_result_default_details_is_empty():
    employee = Employee.from_dict(_employee_dict())
    result = EmployeePayResult(employee=employee, gross=1.0, taxes=0.0, net=1.0)
    assert result.to_dict()["details"] == {}