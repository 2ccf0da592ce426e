"""Test JSON and binary codecs, including rejection of tampered payloads."""

import json
import struct
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from statypes.error_models import UNKNOWN, ConfInt, NormalErr, TErr
from statypes.estimate import Estimate, estimate_from_err, estimate_t_err, pm
from statypes.exceptions import DecodeError
from statypes.limits import LowerLimit, UpperLimit
from statypes.probability import CL, CL90, CL95, CL99, PValue, cl_from_pvalue, mk_pvalue
from statypes.serialization import dumps, from_bytes, from_dict, loads, to_bytes, to_dict

VALUES = [
    mk_pvalue(0.0),
    mk_pvalue(0.05),
    mk_pvalue(1.0),
    CL95,
    cl_from_pvalue(0.0),
    cl_from_pvalue(1.0),
    NormalErr(2.5),
    TErr(0.3, 12.0),
    UNKNOWN,
    ConfInt(1.0, 2.0, CL99),
    pm(144.0, 5.0),
    estimate_t_err(1.0, 0.1, 3.0),
    Estimate(1.0, UNKNOWN),
    estimate_from_err(10.0, (2.0, 3.0), CL95),
    UpperLimit(3.2, CL95),
    LowerLimit(1e34, CL90),
]


@pytest.mark.parametrize("value", VALUES, ids=repr)
def test_json_round_trip(value):
    assert loads(dumps(value)) == value


@pytest.mark.parametrize("value", VALUES, ids=repr)
def test_binary_round_trip(value):
    assert from_bytes(to_bytes(value)) == value


class TestJsonFormat:
    def test_cl_stores_complement(self):
        assert to_dict(CL95) == {"type": "CL", "p_value": 0.05}

    def test_estimate_record(self):
        assert to_dict(estimate_from_err(144, (4, 6), CL95)) == {
            "type": "Estimate",
            "point": 144,
            "error": {
                "type": "ConfInt",
                "lower_delta": 4,
                "upper_delta": 6,
                "cl": {"type": "CL", "p_value": 0.05},
            },
        }

    def test_unknown_t_err(self):
        assert to_dict(UNKNOWN) == {"type": "TErr", "unknown": True}

    def test_unsupported_value(self):
        with pytest.raises(TypeError, match="No JSON encoding"):
            to_dict(object())


class TestJsonRejects:
    @pytest.mark.parametrize("p", [-0.1, 1.5])
    def test_out_of_range_pvalue(self, p):
        with pytest.raises(DecodeError, match="out of \\[0,1\\] range"):
            loads(json.dumps({"type": "PValue", "p_value": p}))

    def test_out_of_range_nested_cl(self):
        data = to_dict(UpperLimit(3.2, CL95))
        data["cl"]["p_value"] = 2.0
        with pytest.raises(DecodeError, match="CL: probability"):
            from_dict(data)

    def test_tampered_interval_cl(self):
        text = dumps(estimate_from_err(10.0, (2.0, 3.0), CL95)).replace("0.05", "-0.05")
        with pytest.raises(DecodeError):
            loads(text)

    def test_missing_key(self):
        with pytest.raises(DecodeError, match="Missing key 'sigma'"):
            from_dict({"type": "NormalErr"})

    def test_non_numeric_field(self):
        with pytest.raises(DecodeError, match="must be a number"):
            from_dict({"type": "CL", "p_value": "0.05"})
        with pytest.raises(DecodeError, match="must be a number"):
            from_dict({"type": "PValue", "p_value": True})

    def test_unknown_type(self):
        with pytest.raises(DecodeError, match="Unknown type tag"):
            from_dict({"type": "Nope"})

    def test_not_an_object(self):
        with pytest.raises(DecodeError, match="Expected a JSON object"):
            loads("[1, 2]")

    def test_invalid_json(self):
        with pytest.raises(DecodeError, match="Invalid JSON"):
            loads("{not json")

    def test_estimate_with_non_error(self):
        data = {"type": "Estimate", "point": 1.0, "error": to_dict(CL95)}
        with pytest.raises(DecodeError, match="Estimate error cannot be CL"):
            from_dict(data)

    def test_decode_error_is_logged(self, caplog):
        with caplog.at_level("DEBUG", logger="statypes.serialization"):
            with pytest.raises(DecodeError):
                from_dict({"type": "CL", "p_value": 3})
        assert "Rejected payload" in caplog.text


class TestBinaryRejects:
    def test_tampered_cl(self):
        data = bytes([2]) + struct.pack(">d", 1.5)
        with pytest.raises(DecodeError, match="CL: probability"):
            from_bytes(data)

    def test_tampered_pvalue(self):
        data = bytes([1]) + struct.pack(">d", -0.25)
        with pytest.raises(DecodeError, match="PValue: probability"):
            from_bytes(data)

    def test_tampered_nested_cl(self):
        encoded = bytearray(to_bytes(LowerLimit(5.0, CL95)))
        encoded[-8:] = struct.pack(">d", 7.0)
        with pytest.raises(DecodeError):
            from_bytes(bytes(encoded))

    def test_nan_probability(self):
        data = bytes([2]) + struct.pack(">d", float("nan"))
        with pytest.raises(DecodeError):
            from_bytes(data)

    def test_truncated(self):
        with pytest.raises(DecodeError, match="Truncated"):
            from_bytes(to_bytes(pm(1.0, 2.0))[:-3])
        with pytest.raises(DecodeError, match="Truncated"):
            from_bytes(b"")

    def test_trailing_bytes(self):
        with pytest.raises(DecodeError, match="trailing"):
            from_bytes(to_bytes(CL95) + b"\x00")

    def test_unknown_tag(self):
        with pytest.raises(DecodeError, match="Unknown type tag 99"):
            from_bytes(bytes([99]))

    def test_invalid_t_err_presence(self):
        with pytest.raises(DecodeError, match="presence byte"):
            from_bytes(bytes([4, 7]))

    def test_expected_type(self):
        assert isinstance(from_bytes(to_bytes(CL95), expected=CL), CL)
        with pytest.raises(DecodeError, match="Expected PValue, decoded CL"):
            from_bytes(to_bytes(CL95), expected=PValue)

    def test_binary_layout(self):
        assert to_bytes(CL95) == bytes([2]) + struct.pack(">d", 0.05)
        assert to_bytes(UNKNOWN) == bytes([4, 0])

    def test_unsupported_value(self):
        with pytest.raises(TypeError, match="No binary encoding"):
            to_bytes("0.05")


class TestNumericFields:
    @pytest.mark.parametrize(
        "value",
        [mk_pvalue(Fraction(1, 3)), cl_from_pvalue(Decimal("0.1")), pm(Fraction(1, 2), 1.0)],
        ids=repr,
    )
    def test_inexact_types_rejected_by_both_codecs(self, value):
        with pytest.raises(TypeError, match="Cannot encode"):
            to_bytes(value)
        with pytest.raises(TypeError, match="Cannot encode"):
            dumps(value)

    def test_large_int_rejected_in_binary(self):
        with pytest.raises(TypeError, match="no exact double representation"):
            to_bytes(pm(2**53 + 1, 1))

    def test_huge_int_rejected_in_binary(self):
        with pytest.raises(TypeError, match="no exact double representation"):
            to_bytes(UpperLimit(10**400, CL95))

    def test_large_int_json_round_trip(self):
        value = pm(2**53 + 1, 1)
        assert loads(dumps(value)) == value

    def test_exact_int_binary_round_trip(self):
        value = pm(2**53, 1)
        assert from_bytes(to_bytes(value)) == value

    def test_numpy_scalars_round_trip(self):
        value = estimate_from_err(np.float64(10.0), (np.float64(2.0), np.int64(3)), CL95)
        assert from_bytes(to_bytes(value)) == estimate_from_err(10.0, (2.0, 3.0), CL95)
        assert loads(dumps(value)) == estimate_from_err(10.0, (2.0, 3.0), CL95)
