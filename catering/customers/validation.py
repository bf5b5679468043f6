from __future__ import annotations

from typing import Any, Mapping, Union

from pydantic import ValidationError

from ..data.models import Customer
from ..exceptions import CustomerValidationError


def validate_customer(payload: Union[Customer, Mapping[str, Any]]) -> Customer:
    """Validate a customer payload before it is written to the record store.

    Raises:
        CustomerValidationError: name or phone is missing/blank, or another field is invalid.
    """
    if isinstance(payload, Customer):
        payload = payload.model_dump()
    try:
        return Customer.model_validate(dict(payload))
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise CustomerValidationError(fields or ["customer"]) from e
