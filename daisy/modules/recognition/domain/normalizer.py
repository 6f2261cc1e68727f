# 📄 File: daisy/modules/recognition/domain/normalizer.py
# 🧭 Purpose (Layman Explanation):
# Reads the answer of the plant recognition job and turns it into a list of
# likely plants, each with how sure the model is and its other common names.
# 🧪 Purpose (Technical Summary):
# Strict JSON array to DataPlant list conversion. Any malformed record raises
# ParseError naming the field and the record index; nothing is skipped.
# 🔗 Dependencies:
# json, numbers, daisy.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# RemoteGateway.recognize_image

"""
Recognition result normalization.

Turns the body returned by the recognition function into DataPlant records.
Parsing is strict: the first malformed record aborts the whole batch.
"""

import json
from numbers import Real
from typing import Any, List, Union

from daisy.shared.core.exceptions import ParseError
from daisy.shared.utils.logging import get_logger

from .models import AltName, DataPlant

logger = get_logger(__name__)

REQUIRED_FIELDS = ("plant_name", "probability", "alt_names")


def _decode(payload: Union[str, bytes, list, None]) -> list:
    if isinstance(payload, list):
        return payload

    if payload is None:
        raise ParseError("Recognition payload is empty")

    try:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        decoded = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"Recognition payload is not valid JSON: {e}") from e

    if not isinstance(decoded, list):
        raise ParseError(
            f"Recognition payload must be a JSON array, got {type(decoded).__name__}"
        )
    return decoded


def _parse_alt_names(raw: Any, index: int) -> List[AltName]:
    if not isinstance(raw, list):
        raise ParseError("Field 'alt_names' must be an array", field="alt_names", index=index)

    alt_names = []
    for alt in raw:
        if not isinstance(alt, dict) or "name" not in alt:
            raise ParseError(
                f"Record {index}: alternate name is missing field 'name'",
                field="alt_names.name",
                index=index
            )
        if not isinstance(alt["name"], str):
            raise ParseError(
                f"Record {index}: alternate name must be a string",
                field="alt_names.name",
                index=index
            )
        alt_names.append(AltName(name=alt["name"]))
    return alt_names


def _parse_record(record: Any, index: int) -> DataPlant:
    if not isinstance(record, dict):
        raise ParseError(f"Record {index} is not an object", index=index)

    for field in REQUIRED_FIELDS:
        if field not in record:
            raise ParseError(
                f"Record {index} is missing field '{field}'",
                field=field,
                index=index
            )

    plant_name = record["plant_name"]
    if not isinstance(plant_name, str):
        raise ParseError(f"Record {index}: 'plant_name' must be a string", field="plant_name", index=index)

    probability = record["probability"]
    # bool is a Real subclass
    if isinstance(probability, bool) or not isinstance(probability, Real):
        raise ParseError(f"Record {index}: 'probability' must be a number", field="probability", index=index)
    if not 0.0 <= probability <= 1.0:
        raise ParseError(
            f"Record {index}: 'probability' {probability} is outside [0, 1]",
            field="probability",
            index=index
        )

    return DataPlant(
        plant_name=plant_name,
        probability=float(probability),
        alt_names=_parse_alt_names(record["alt_names"], index),
    )


def normalize_plants(payload: Union[str, bytes, list, None]) -> List[DataPlant]:
    """
    Parse a recognition payload into DataPlant records.

    Args:
        payload: JSON text (or already decoded list) holding an array of
            ``{"plant_name", "probability", "alt_names": [{"name"}]}`` objects

    Returns:
        List[DataPlant]: One record per array element, in order. An empty
        array gives an empty list.

    Raises:
        ParseError: If the payload is not a JSON array or any record is malformed
    """
    records = _decode(payload)
    plants = [_parse_record(record, index) for index, record in enumerate(records)]
    logger.debug(f"Normalized {len(plants)} plant candidates")
    return plants
