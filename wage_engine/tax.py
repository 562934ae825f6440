"""Tax laws and the calculators that apply them."""

from __future__ import annotations

import abc
import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from wage_engine.models import Employee

logger = logging.getLogger(__name__)

FEDERAL_REGION = "US-FED"


@dataclass
class TaxLaw:
    """Tax rules for one region at one version; ``rules`` is free-form JSON."""

    region: str
    version: str
    rules: Any

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TaxLaw:
        if not isinstance(data, Mapping):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        for name in ("region", "version", "rules"):
            if name not in data:
                raise ValueError(f"missing field `{name}`")
        for name in ("region", "version"):
            if not isinstance(data[name], str):
                raise ValueError(f"field `{name}` must be a string")
        return cls(region=data["region"], version=data["version"], rules=data["rules"])

    def to_dict(self) -> dict[str, Any]:
        return {"region": self.region, "version": self.version, "rules": self.rules}


class TaxCalculator(abc.ABC):
    """Determines the tax to withhold from a gross amount for one jurisdiction."""

    @abc.abstractmethod
    def region_code(self) -> str:
        """The canonical region code, such as ``"US-OK"``."""

    @abc.abstractmethod
    def calculate(self, employee: Employee, gross: float, law: TaxLaw) -> float:
        """Total tax withheld from ``gross`` for ``employee`` under ``law``."""


def _flat_rate(law: TaxLaw) -> float:
    rules = law.rules
    if not isinstance(rules, Mapping):
        return 0.0
    rate = rules.get("rate")
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        return 0.0
    return float(rate)


def load_tax_laws_from_dir(path: str | os.PathLike[str]) -> list[TaxLaw]:
    """Parse every ``.json`` file in ``path`` as a tax law.

    Files that fail to parse are skipped with a warning; a missing
    directory yields an empty list.
    """
    directory = Path(path)
    if not directory.is_dir():
        return []
    laws: list[TaxLaw] = []
    with os.scandir(directory) as entries:
        files = sorted(
            (e for e in entries if e.is_file(follow_symlinks=False)),
            key=lambda e: e.name,
        )
    for entry in files:
        file_path = Path(entry.path)
        if file_path.suffix != ".json":
            continue
        text = file_path.read_text(encoding="utf-8")
        try:
            laws.append(TaxLaw.from_dict(json.loads(text)))
        except ValueError as err:
            logger.warning("Failed to parse tax law %s: %s", file_path, err)
    return laws


class UsFederalCalculator(TaxCalculator):
    """Flat-rate federal tax taken from the law's ``rate`` rule."""

    def region_code(self) -> str:
        return FEDERAL_REGION

    def calculate(self, employee: Employee, gross: float, law: TaxLaw) -> float:
        return gross * _flat_rate(law)


class FlatStateCalculator(TaxCalculator):
    """Flat-rate state tax taken from the law's ``rate`` rule."""

    def __init__(self, region: str) -> None:
        self.region = region

    def __repr__(self) -> str:
        return f"FlatStateCalculator(region={self.region!r})"

    def region_code(self) -> str:
        return self.region

    def calculate(self, employee: Employee, gross: float, law: TaxLaw) -> float:
        return gross * _flat_rate(law)