"""Load holder records from JSON, YAML or CSV files.

Each record needs an address, a token balance and the hour of the first
purchase. Thresholds and the reference time are taken from the run
configuration and copied onto every Holder.

Accepted shapes:
    JSON / YAML:  [{"address": ..., "tokens": ..., "hours_after_launch": ...}, ...]
                  or {"holders": [...]}
    CSV:          address,tokens,hours_after_launch
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ..core.config import DistributionConfig
from ..core.exceptions import HolderFileError, HolderValidationError
from ..core.models import Holder
from .registry import HolderRegistry

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("address", "tokens", "hours_after_launch")


def _read_records(path: Path) -> list[Any]:
    suffix = path.suffix.lower()
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            if suffix == ".json":
                data = json.load(f)
            elif suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            elif suffix == ".csv":
                return list(csv.DictReader(f))
            else:
                raise HolderFileError(str(path), f"unsupported file type '{suffix}'")
    except FileNotFoundError:
        raise HolderFileError(str(path), "file not found")
    except json.JSONDecodeError as e:
        raise HolderFileError(str(path), f"invalid JSON: {e}")
    except yaml.YAMLError as e:
        raise HolderFileError(str(path), f"invalid YAML: {e}")
    except csv.Error as e:
        raise HolderFileError(str(path), f"invalid CSV: {e}")
    except UnicodeDecodeError as e:
        raise HolderFileError(str(path), f"not valid UTF-8: {e}")
    except OSError as e:
        raise HolderFileError(str(path), f"cannot read file: {e}")

    if isinstance(data, dict):
        data = data.get("holders")
    if data is None:
        return []
    if not isinstance(data, list):
        raise HolderFileError(str(path), "expected a list of holders")
    return data


def _parse_number(record: dict[str, Any], field: str, address: str | None) -> float:
    value = record.get(field)
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    if isinstance(value, bool):
        raise HolderValidationError(field, value, "expected a number", address)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise HolderValidationError(field, value, "expected a number", address)


def parse_holder(record: Any, config: DistributionConfig) -> Holder:
    """
    Convert a raw record into a Holder.

    Args:
        record: Mapping with address, tokens and hours_after_launch
        config: Run configuration supplying thresholds and reference time

    Returns:
        Holder carrying the run's thresholds
    """
    if not isinstance(record, dict):
        raise HolderValidationError("record", record, "expected a mapping")

    missing = [f for f in REQUIRED_FIELDS if record.get(f) in (None, "")]
    if missing:
        raise HolderValidationError(missing[0], None, "missing required field", record.get("address"))

    address = str(record["address"]).strip()
    return config.make_holder(
        address=address,
        tokens=_parse_number(record, "tokens", address),
        hours_after_launch=_parse_number(record, "hours_after_launch", address),
    )


def load_holders(path: Path | str, config: DistributionConfig) -> list[Holder]:
    """
    Load holders from a file.

    Args:
        path: JSON, YAML or CSV file
        config: Run configuration supplying thresholds and reference time

    Returns:
        Holders in file order

    Raises:
        HolderFileError: If the file cannot be read or parsed
        HolderValidationError: If a record is malformed
        DuplicateHolderError: If an address appears twice
    """
    path = Path(path)
    records = _read_records(path)

    registry = HolderRegistry(parse_holder(record, config) for record in records)

    logger.info(f"Loaded {len(registry)} holders from {path}")
    return list(registry)
