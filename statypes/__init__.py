"""
Value types for statistical uncertainty.

Represents confidence levels, p-values, point estimates with error models and
one-sided limits, with validated construction and conversions between
p-values, confidence levels and nσ.

Modules:
    - probability: ``PValue`` and ``CL`` with raising and fallible constructors.
    - sigma: Conversions between confidence levels and numbers of sigma.
    - error_models: ``NormalErr``, ``TErr`` and ``ConfInt`` with scaling.
    - estimate: Point estimates with an attached error model.
    - limits: Upper and lower limits, test statistics.
    - serialization: JSON and binary codecs with validating decode.
    - columnar: Packed DataFrame/array layout for many values.
    - reporting: Text formatting with significant-figure rounding.
"""

import logging

__version__ = "0.14.0"

from .error_models import UNKNOWN, ConfInt, NormalErr, Scalable, TErr, TErrUnknown, scale
from .estimate import (
    Estimate,
    asym_errors,
    confidence_interval,
    estimate_from_err,
    estimate_from_interval,
    estimate_norm_err,
    estimate_t_err,
    pm,
)
from .exceptions import (
    DecodeError,
    ProbabilityRangeError,
    SigmaRangeError,
    StatypesError,
)
from .limits import LowerLimit, TestStatistic, UpperLimit
from .probability import (
    CL,
    CL90,
    CL95,
    CL99,
    PValue,
    as_cl,
    as_pvalue,
    cl_from_pvalue,
    cl_from_pvalue_or_none,
    conf_level,
    get_pvalue,
    mk_conf_level,
    mk_conf_level_or_none,
    mk_pvalue,
    mk_pvalue_or_none,
    parse_cl,
    parse_pvalue,
    pvalue,
)
from .samples import Sample, WeightedSample, Weights
from .sigma import (
    get_n_sigma,
    get_n_sigma1,
    n_sigma,
    n_sigma1,
    n_sigma1_or_none,
    n_sigma_or_none,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Probability primitives
    "PValue",
    "CL",
    "CL90",
    "CL95",
    "CL99",
    "mk_pvalue",
    "mk_pvalue_or_none",
    "cl_from_pvalue",
    "cl_from_pvalue_or_none",
    "mk_conf_level",
    "mk_conf_level_or_none",
    "pvalue",
    "get_pvalue",
    "conf_level",
    "as_cl",
    "as_pvalue",
    "parse_pvalue",
    "parse_cl",
    # Sigma conversion
    "n_sigma",
    "n_sigma1",
    "n_sigma_or_none",
    "n_sigma1_or_none",
    "get_n_sigma",
    "get_n_sigma1",
    # Error models
    "NormalErr",
    "TErr",
    "TErrUnknown",
    "UNKNOWN",
    "ConfInt",
    "Scalable",
    "scale",
    # Estimates
    "Estimate",
    "estimate_norm_err",
    "pm",
    "estimate_t_err",
    "estimate_from_err",
    "estimate_from_interval",
    "confidence_interval",
    "asym_errors",
    # Limits
    "UpperLimit",
    "LowerLimit",
    "TestStatistic",
    # Samples
    "Sample",
    "Weights",
    "WeightedSample",
    # Errors
    "StatypesError",
    "ProbabilityRangeError",
    "SigmaRangeError",
    "DecodeError",
]
