"""
JSON and binary codecs for statypes values.

Both codecs accept numeric fields of type ``int``, ``float`` or a numpy
scalar and round-trip them exactly. Other numeric types (``Fraction``,
``Decimal``) raise ``TypeError`` on encode. The binary codec stores every
number as a big-endian IEEE-754 double, so it also refuses integers with no
exact double form. Decoding re-runs the validating constructors: a payload
holding a probability outside [0, 1] raises ``DecodeError`` and is never
clamped.

JSON records carry a ``"type"`` key; nested values (the error of an
``Estimate``, the confidence level of an interval or limit) are nested
records. Binary values start with a one-byte type tag; nested values are
encoded recursively with their own tag.
"""

from __future__ import annotations

import json
import logging
import struct
from typing import Any, Callable, Dict, Optional

import numpy as np

from .error_models import UNKNOWN, ConfInt, NormalErr, TErr, TErrUnknown
from .estimate import Estimate
from .exceptions import DecodeError
from .limits import LowerLimit, UpperLimit
from .probability import CL, PValue, cl_from_pvalue_or_none, mk_pvalue_or_none
from .schema import FIELDS

logger = logging.getLogger(__name__)

_DOUBLE = struct.Struct(">d")
_BYTE = struct.Struct(">B")

_TAG_PVALUE = 1
_TAG_CL = 2
_TAG_NORMAL_ERR = 3
_TAG_T_ERR = 4
_TAG_CONF_INT = 5
_TAG_ESTIMATE = 6
_TAG_UPPER_LIMIT = 7
_TAG_LOWER_LIMIT = 8


def _reject(message: str, payload: Any) -> DecodeError:
    logger.debug("Rejected payload %r: %s", payload, message)
    return DecodeError(message)


def _json_number(x: Any) -> Any:
    if isinstance(x, np.generic):
        x = x.item()
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        raise TypeError(f"Cannot encode {type(x).__name__} as a JSON number")
    return x


# ---------------------------------------------------------------------------
# JSON (structured text)
# ---------------------------------------------------------------------------


def to_dict(value: Any) -> Dict[str, Any]:
    """Convert a statypes value to a JSON-compatible dictionary.

    Raises:
        TypeError: If the value (or a nested value) has no JSON form.
    """
    f = FIELDS
    if isinstance(value, PValue):
        return {f.type_tag: "PValue", f.p_value: _json_number(value.value)}
    if isinstance(value, CL):
        return {f.type_tag: "CL", f.p_value: _json_number(value.p)}
    if isinstance(value, NormalErr):
        return {f.type_tag: "NormalErr", f.sigma: _json_number(value.sigma)}
    if isinstance(value, TErr):
        return {
            f.type_tag: "TErr",
            f.t_error: _json_number(value.error),
            f.dof: _json_number(value.degrees_of_freedom),
        }
    if isinstance(value, TErrUnknown):
        return {f.type_tag: "TErr", f.unknown: True}
    if isinstance(value, ConfInt):
        return {
            f.type_tag: "ConfInt",
            f.lower_delta: _json_number(value.lower_delta),
            f.upper_delta: _json_number(value.upper_delta),
            f.cl: to_dict(value.cl),
        }
    if isinstance(value, Estimate):
        return {
            f.type_tag: "Estimate",
            f.point: _json_number(value.point),
            f.error: to_dict(value.error),
        }
    if isinstance(value, (UpperLimit, LowerLimit)):
        return {
            f.type_tag: type(value).__name__,
            f.bound: _json_number(value.bound),
            f.cl: to_dict(value.cl),
        }
    raise TypeError(f"No JSON encoding for {type(value).__name__}")


def _field(data: Dict[str, Any], key: str) -> Any:
    if key not in data:
        raise _reject(f"Missing key '{key}' in {data.get(FIELDS.type_tag)} record", data)
    return data[key]


def _number(data: Dict[str, Any], key: str) -> Any:
    x = _field(data, key)
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        raise _reject(f"Field '{key}' must be a number, got {x!r}", data)
    return x


def _record(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise _reject(f"Expected a JSON object, got {type(data).__name__}", data)
    return data


def _pvalue_from_dict(data: Dict[str, Any]) -> PValue:
    pv = mk_pvalue_or_none(_number(data, FIELDS.p_value))
    if pv is None:
        raise _reject("PValue: probability is out of [0,1] range", data)
    return pv


def _cl_from_dict(data: Dict[str, Any]) -> CL:
    data = _record(data)
    if data.get(FIELDS.type_tag) != "CL":
        raise _reject(f"Expected a CL record, got {data.get(FIELDS.type_tag)!r}", data)
    cl = cl_from_pvalue_or_none(_number(data, FIELDS.p_value))
    if cl is None:
        raise _reject("CL: probability is out of [0,1] range", data)
    return cl


def _t_err_from_dict(data: Dict[str, Any]) -> Any:
    if data.get(FIELDS.unknown) is True:
        return UNKNOWN
    return TErr(_number(data, FIELDS.t_error), _number(data, FIELDS.dof))


def _estimate_from_dict(data: Dict[str, Any]) -> Estimate:
    error = from_dict(_field(data, FIELDS.error))
    if not isinstance(error, (NormalErr, TErr, TErrUnknown, ConfInt)):
        raise _reject(f"Estimate error cannot be {type(error).__name__}", data)
    return Estimate(_number(data, FIELDS.point), error)


_JSON_DECODERS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    "PValue": _pvalue_from_dict,
    "CL": _cl_from_dict,
    "NormalErr": lambda d: NormalErr(_number(d, FIELDS.sigma)),
    "TErr": _t_err_from_dict,
    "ConfInt": lambda d: ConfInt(
        _number(d, FIELDS.lower_delta),
        _number(d, FIELDS.upper_delta),
        _cl_from_dict(_field(d, FIELDS.cl)),
    ),
    "Estimate": _estimate_from_dict,
    "UpperLimit": lambda d: UpperLimit(
        _number(d, FIELDS.bound), _cl_from_dict(_field(d, FIELDS.cl))
    ),
    "LowerLimit": lambda d: LowerLimit(
        _number(d, FIELDS.bound), _cl_from_dict(_field(d, FIELDS.cl))
    ),
}


def from_dict(data: Any) -> Any:
    """Rebuild a statypes value from the output of ``to_dict``.

    Raises:
        DecodeError: On unknown type tags, missing or non-numeric fields, and
            probabilities outside [0, 1].
    """
    data = _record(data)
    tag = data.get(FIELDS.type_tag)
    decoder = _JSON_DECODERS.get(tag) if isinstance(tag, str) else None
    if decoder is None:
        raise _reject(f"Unknown type tag {tag!r}", data)
    return decoder(data)


def dumps(value: Any, **kwargs: Any) -> str:
    """Serialize a statypes value to a JSON string."""
    return json.dumps(to_dict(value), **kwargs)


def loads(text: str) -> Any:
    """Deserialize a statypes value from a JSON string.

    Raises:
        DecodeError: If the text is not valid JSON or not a valid value.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise _reject(f"Invalid JSON: {exc}", text) from exc
    return from_dict(data)


# ---------------------------------------------------------------------------
# Binary
# ---------------------------------------------------------------------------


def _pack_double(x: Any) -> bytes:
    if isinstance(x, np.generic):
        x = x.item()
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        raise TypeError(f"Cannot encode {type(x).__name__} as a binary number")
    if isinstance(x, int):
        try:
            exact = float(x) == x
        except OverflowError:
            exact = False
        if not exact:
            raise TypeError(f"Integer {x} has no exact double representation")
    return _DOUBLE.pack(float(x))


def to_bytes(value: Any) -> bytes:
    """Encode a statypes value as bytes.

    Raises:
        TypeError: If the value (or a nested value) has no binary form.
    """
    if isinstance(value, PValue):
        return _BYTE.pack(_TAG_PVALUE) + _pack_double(value.value)
    if isinstance(value, CL):
        return _BYTE.pack(_TAG_CL) + _pack_double(value.p)
    if isinstance(value, NormalErr):
        return _BYTE.pack(_TAG_NORMAL_ERR) + _pack_double(value.sigma)
    if isinstance(value, TErr):
        return (
            _BYTE.pack(_TAG_T_ERR)
            + _BYTE.pack(1)
            + _pack_double(value.error)
            + _pack_double(value.degrees_of_freedom)
        )
    if isinstance(value, TErrUnknown):
        return _BYTE.pack(_TAG_T_ERR) + _BYTE.pack(0)
    if isinstance(value, ConfInt):
        return (
            _BYTE.pack(_TAG_CONF_INT)
            + _pack_double(value.lower_delta)
            + _pack_double(value.upper_delta)
            + to_bytes(value.cl)
        )
    if isinstance(value, Estimate):
        return _BYTE.pack(_TAG_ESTIMATE) + _pack_double(value.point) + to_bytes(value.error)
    if isinstance(value, UpperLimit):
        return _BYTE.pack(_TAG_UPPER_LIMIT) + _pack_double(value.bound) + to_bytes(value.cl)
    if isinstance(value, LowerLimit):
        return _BYTE.pack(_TAG_LOWER_LIMIT) + _pack_double(value.bound) + to_bytes(value.cl)
    raise TypeError(f"No binary encoding for {type(value).__name__}")


class _Reader:
    """Sequential reader over an encoded payload."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self.offset = 0

    def _unpack(self, fmt: struct.Struct) -> Any:
        try:
            (x,) = fmt.unpack_from(self.data, self.offset)
        except struct.error as exc:
            raise _reject(f"Truncated payload at byte {self.offset}", self.data) from exc
        self.offset += fmt.size
        return x

    def byte(self) -> int:
        return self._unpack(_BYTE)

    def double(self) -> float:
        return self._unpack(_DOUBLE)

    def finish(self) -> None:
        if self.offset != len(self.data):
            raise _reject(
                f"{len(self.data) - self.offset} trailing byte(s) after value", self.data
            )


def _read_cl(reader: _Reader) -> CL:
    value = _read_value(reader)
    if not isinstance(value, CL):
        raise _reject(f"Expected a CL, got {type(value).__name__}", reader.data)
    return value


def _read_value(reader: _Reader) -> Any:
    tag = reader.byte()
    if tag == _TAG_PVALUE:
        pv = mk_pvalue_or_none(reader.double())
        if pv is None:
            raise _reject("PValue: probability is out of [0,1] range", reader.data)
        return pv
    if tag == _TAG_CL:
        cl = cl_from_pvalue_or_none(reader.double())
        if cl is None:
            raise _reject("CL: probability is out of [0,1] range", reader.data)
        return cl
    if tag == _TAG_NORMAL_ERR:
        return NormalErr(reader.double())
    if tag == _TAG_T_ERR:
        present = reader.byte()
        if present == 0:
            return UNKNOWN
        if present != 1:
            raise _reject(f"Invalid TErr presence byte {present}", reader.data)
        return TErr(reader.double(), reader.double())
    if tag == _TAG_CONF_INT:
        lower, upper = reader.double(), reader.double()
        return ConfInt(lower, upper, _read_cl(reader))
    if tag == _TAG_ESTIMATE:
        point = reader.double()
        error = _read_value(reader)
        if not isinstance(error, (NormalErr, TErr, TErrUnknown, ConfInt)):
            raise _reject(f"Estimate error cannot be {type(error).__name__}", reader.data)
        return Estimate(point, error)
    if tag == _TAG_UPPER_LIMIT:
        bound = reader.double()
        return UpperLimit(bound, _read_cl(reader))
    if tag == _TAG_LOWER_LIMIT:
        bound = reader.double()
        return LowerLimit(bound, _read_cl(reader))
    raise _reject(f"Unknown type tag {tag}", reader.data)


def from_bytes(data: bytes, expected: Optional[type] = None) -> Any:
    """Decode a value produced by ``to_bytes``.

    Args:
        data (bytes): Encoded payload.
        expected (type, optional): If given, the decoded value must be an
            instance of this type.

    Raises:
        DecodeError: On unknown tags, truncated input, trailing bytes,
            probabilities outside [0, 1], or a type mismatch with ``expected``.
    """
    reader = _Reader(data)
    value = _read_value(reader)
    reader.finish()
    if expected is not None and not isinstance(value, expected):
        raise _reject(
            f"Expected {expected.__name__}, decoded {type(value).__name__}", data
        )
    return value
