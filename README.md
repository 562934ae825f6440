# wage_engine

A payroll calculation engine. You give it a list of employees, their pay items, a pay period and a set of regional tax laws. For each employee it works out gross pay, the tax withheld and net pay. The same engine can be served over HTTP as a small WSGI application.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
|---|---|
| `wage_engine.models` | `PayFrequency`, `Employee`, `PayItem`, `PayPeriod`, `PayRunInput`, `EmployeePayResult`, `PayRunResult` |
| `wage_engine.tax` | `TaxLaw`, `TaxCalculator`, `UsFederalCalculator`, `FlatStateCalculator`, `load_tax_laws_from_dir` |
| `wage_engine.engine` | `run_payroll` |
| `wage_engine.api` | `AppState`, `PayrollApp`, `build_router`, `serve` |
| `wage_engine.cli` | `main`, the `wage-engine` command |

Every model is a dataclass with two methods:

- `from_dict(data)` builds the model from plain JSON-like data. It raises `ValueError` when a field is missing or has the wrong type.
- `to_dict()` converts the model back to plain data.

## How pay is worked out

- **Employee** has an `id`, a `name`, a `home_region` (such as `US-OK`), a `pay_rate` and a `pay_frequency`.
  - `hourly`: `pay_rate` is the hourly rate. The hours worked come from the first pay item whose description is `hours`, in any letter case. With no such item, the hours are 0.
  - `salary`: `pay_rate` is the amount paid per pay period.
- **PayItem** is an extra earning (a positive amount) or a deduction (a negative amount). Pay items are keyed by employee id. Every item that is not `hours` is added to gross pay.
- **Tax**:
  - `run_payroll(pay_input, tax_laws, calculators)` looks up both the law and the calculator by the employee's `home_region`. If either is not found under that key, it falls back to `US-FED`.
  - If no law or no calculator is found, no tax is withheld.
  - Net pay is gross minus taxes.
  - When a law was found, each result's `details` holds `tax_region` and `tax_version`. Otherwise `details` is empty.
- **Calculators**: `UsFederalCalculator` (region `US-FED`) and `FlatStateCalculator(region)` both apply a flat `rate` taken from the law's `rules`. If `rules` has no numeric `rate`, they withhold nothing.
- **Custom calculators**: subclass `TaxCalculator` and implement `region_code()` and `calculate(employee, gross, law)`.

Results come back in the same order as the employees in the input.

## Tax law files

Each law is one JSON file:

```json
{"region": "US-OK", "version": "2025", "rules": {"rate": 0.05}}
```

`load_tax_laws_from_dir(path)` loads laws from a directory:

- It reads every regular `.json` file in the directory, in file-name order.
- A file that is not a valid tax law is logged as a warning and skipped.
- A missing directory gives an empty list.

## Using the library

```python
from wage_engine.engine import run_payroll
from wage_engine.models import PayRunInput
from wage_engine.tax import TaxLaw, UsFederalCalculator

pay_input = PayRunInput.from_dict({
    "employees": [
        {"id": "1", "name": "Ada", "home_region": "US-FED",
         "pay_rate": 1000.0, "pay_frequency": "salary"},
    ],
    "pay_items": {"1": [{"description": "bonus", "amount": 200.0}]},
    "pay_period": {"start": "2025-01-01", "end": "2025-01-15"},
})
laws = {"US-FED": TaxLaw(region="US-FED", version="2025", rules={"rate": 0.1})}
calculators = {"US-FED": UsFederalCalculator()}

result = run_payroll(pay_input, laws, calculators)
print(result.to_dict())  # gross 1200.0, taxes 120.0, net 1080.0
```

## The HTTP API

`build_router(tax_law_dir)` loads the laws in a directory and returns a `(PayrollApp, AppState)` pair.

- Laws are stored under the key `<region>-<version>`, for example `US-OK-2025`.
- A `UsFederalCalculator` is always registered under `US-FED`.
- A `FlatStateCalculator` is registered for every other region found.

Because the engine looks up laws by the employee's `home_region`, a law applies through the server only when an employee's `home_region` equals one of these `<region>-<version>` keys.

`PayrollApp` is a WSGI application with a single endpoint, `POST /api/calculate`. It takes a pay run as a JSON body, in the shape `PayRunInput.from_dict` accepts.

| Status | When |
|---|---|
| `200` | Success. The body is the pay run result as JSON. |
| `400` | The body is not valid JSON. |
| `404` | The path is not `/api/calculate`. |
| `405` | The method is not POST. |
| `415` | The `Content-Type` is not JSON. |
| `422` | The JSON does not describe a pay run. |
| `500` | The calculation failed. The body is `{"error": "..."}`. |

`serve(addr, tax_law_dir)` serves the application on `addr`, given as `host:port`. An IPv6 host goes in brackets. Requests are handled in threads, and the server runs until it is interrupted.

## Running the server

```
wage-engine
```

The command takes no options apart from `--help`. It is configured through two environment variables:

| Variable | Default | Meaning |
|---|---|---|
| `WAGE_TAX_LAW_DIR` | `tax_laws` | Directory holding the tax law JSON files |
| `WAGE_BIND_ADDR` | `127.0.0.1:3000` | Address and port to listen on |

At start-up it prints `Server listening on <addr>`. If the address is invalid or the socket cannot be opened, it prints `Error running server: ...` to stderr. Ctrl-C stops it.

## What it does not do

- There are no graduated brackets, deductions or allowances. The only tax rule applied is a flat `rate`.
- Nothing is stored. Pay runs and results exist only for the length of a call or a request.
- Tax laws are read once, when the application is built.
- The HTTP API has no authentication.