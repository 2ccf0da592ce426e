"""Define standardized field names for serialized values and DataFrames."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldNames:
    """Container for wire-format keys and column labels.

    The JSON codec and the columnar layer read these names from one place so
    that a record written by one can be matched against columns of the other.

    Attributes:
        type_tag: Key holding the type name of a JSON record.
        p_value: Key for a raw probability. For ``CL`` this is the stored
            complement ``1 - confidence``, not the confidence itself.
        point: Point estimate of an ``Estimate``.
        error: Nested error model of an ``Estimate``.
        sigma: 1σ error of ``NormalErr``.
        t_error: Scale of a Student-t error.
        dof: Degrees of freedom of a Student-t error.
        unknown: Flag marking a Student-t error as not yet determined.
        lower_delta: Distance from the point to the lower interval bound.
        upper_delta: Distance from the point to the upper interval bound.
        cl: Nested confidence level record.
        bound: Value of an upper or lower limit.
        cl_p_value: Column holding the stored complement of a confidence
            level in a DataFrame.
    """

    type_tag: str = "type"
    p_value: str = "p_value"
    point: str = "point"
    error: str = "error"
    sigma: str = "sigma"
    t_error: str = "error"
    dof: str = "degrees_of_freedom"
    unknown: str = "unknown"
    lower_delta: str = "lower_delta"
    upper_delta: str = "upper_delta"
    cl: str = "cl"
    bound: str = "bound"
    cl_p_value: str = "cl_p_value"


FIELDS = FieldNames()
