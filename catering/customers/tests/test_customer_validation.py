import pytest

from catering.customers.validation import validate_customer
from catering.data.models import Customer
from catering.exceptions import CustomerValidationError


def test_valid_payload_is_normalized():
    customer = validate_customer({"name": "  Asha Patel ", "phone": "555-123-4567", "email": ""})
    assert customer.name == "Asha Patel"
    assert customer.email is None


@pytest.mark.parametrize("payload, missing", [
    ({"phone": "555-123-4567"}, ["name"]),
    ({"name": "Asha", "phone": "   "}, ["phone"]),
    ({}, ["name", "phone"]),
])
def test_missing_identity_fields_are_reported(payload, missing):
    with pytest.raises(CustomerValidationError) as exc:
        validate_customer(payload)
    assert exc.value.fields == missing
    assert isinstance(exc.value, ValueError)


def test_accepts_customer_model():
    customer = validate_customer(Customer(name="Ravi", phone="555"))
    assert customer.phone == "555"
