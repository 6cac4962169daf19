"""Shared fixtures and models for engine tests."""

from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any

import pytest

from validknobs_engine import (
    DefaultValidatorProvider,
    ValidationController,
    Validator,
    ValidatorContext,
)


@dataclass
class LoginForm:
    username: str | None = None
    password: str | None = None


@dataclass
class Address:
    street: str | None = None
    city: str | None = None
    postal_code: str | None = None


@dataclass
class Person:
    name: str | None = None
    age: int | None = None
    address: Address | None = None
    emails: list[str] = field(default_factory=list)


class LoginFormValidator(Validator[LoginForm]):
    def configure(self, validate):
        validate.member("password").is_required().has_length(12, None)
        validate.member("username").is_required().has_length(8, 80) \
            .is_safe_text().with_error("Errors", "Username.Unsafe")


class AddressValidator(Validator[Address]):
    def configure(self, validate):
        validate.member("street").is_required().with_error("Errors", "Street.Required")
        validate.member("postal_code").is_digits().with_error("Errors", "PostalCode.Digits")


class PersonValidator(Validator[Person]):
    def configure(self, validate):
        validate.member("name").is_required(stop_on_failure=True).with_error("Errors", "Name.Required") \
            .has_length(2, 40).with_error("Errors", "Name.Length")
        validate.member("age").has_range(0, 150).with_error("Errors", "Age.Range")
        validate.member("address").has_validator().with_error("Errors", "Address.Invalid")
        validate.each_of("emails").is_email().with_error("Errors", "Email.Invalid")


def adhoc_validator(configure) -> Validator:
    """Create a validator whose targets are declared by ``configure``.

    The class declares no object type, so provider discovery never finds it.
    """
    cls = type("AdHocValidator", (Validator,), {"configure": lambda self, validate: configure(validate)})
    return cls()


@pytest.fixture
def models():
    """Model and validator classes declared for discovery."""
    return SimpleNamespace(
        LoginForm=LoginForm,
        Address=Address,
        Person=Person,
        LoginFormValidator=LoginFormValidator,
        AddressValidator=AddressValidator,
        PersonValidator=PersonValidator,
    )


@pytest.fixture
def provider():
    """Default provider with discovery."""
    return DefaultValidatorProvider()


@pytest.fixture
def controller(provider):
    """Controller using the default provider."""
    return ValidationController(provider)


@pytest.fixture
def make_validator():
    """Factory for ad-hoc validators."""
    return adhoc_validator


@pytest.fixture
def run_validation(provider):
    """Validate an object with an ad-hoc validator."""

    def run(configure, obj: Any, continue_validation: bool = True, ignore_empty_results: bool = True):
        validator = adhoc_validator(configure)
        context = ValidatorContext(obj, None, provider, None, continue_validation, ignore_empty_results)
        return validator.validate(context)

    return run


@pytest.fixture
def login_form():
    """Login form with an injection attempt as username."""
    return LoginForm(username='" or ""="', password="$ecureP@ssw0rd")


@pytest.fixture
def person():
    """A valid person."""
    return Person(
        name="Ada Lovelace",
        age=36,
        address=Address(street="12 St James's Square", city="London", postal_code="10001"),
        emails=["ada@example.com"],
    )
