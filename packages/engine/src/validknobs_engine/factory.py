"""Factories building providers and controllers from configuration.

Example Configuration:
    provider:
      - name: default
        factory: validknobs_engine.factory.ValidatorProviderFactory
        cached: true
        validators:
          - type: myapp.forms.LoginForm
            validator: myapp.validators.LoginFormValidator
    controller:
      - name: default
        factory: validknobs_engine.factory.ValidationControllerFactory
        provider: myapp.validators.build_provider
        continue_validation: true
        ignore_empty_results: true
"""

import logging
from typing import Any

from validknobs_config import ConfigError, FactoryBase, load_class

from .controller import ValidationController
from .provider import DefaultValidatorProvider, FactoryValidatorProvider, ValidatorProvider

logger = logging.getLogger(__name__)


class ValidatorProviderFactory(FactoryBase):
    """Factory for creating validator providers from configuration.

    Configuration Options:
        cached (bool): Reuse one validator per type (default: True)
        discover (bool): Discover validator subclasses (default: True)
        resolver (str): Dotted path of a resolver function; selects a
            FactoryValidatorProvider instead of the default provider
        validators (list): Registrations with ``type`` and ``validator``
            dotted paths
    """

    def create(self, **config: Any) -> ValidatorProvider:
        cached = config.get("cached", True)

        resolver_path = config.get("resolver")
        if resolver_path:
            logger.info(f"Creating FactoryValidatorProvider with resolver {resolver_path}")
            return FactoryValidatorProvider(load_class(resolver_path), cached=cached)

        provider = DefaultValidatorProvider(cached=cached, discover=config.get("discover", True))
        logger.info(f"Creating DefaultValidatorProvider (cached={cached})")

        for registration in config.get("validators", []):
            self._register(provider, registration)

        return provider

    def _register(self, provider: DefaultValidatorProvider, registration: dict[str, Any]) -> None:
        type_path = registration.get("type")
        validator_path = registration.get("validator")
        if not type_path or not validator_path:
            logger.warning(f"Validator registration missing 'type' or 'validator', skipping: {registration}")
            return

        provider.register(load_class(type_path), load_class(validator_path), override=registration.get("override", False))
        logger.debug(f"Registered {validator_path} for {type_path}")


class ValidationControllerFactory(FactoryBase):
    """Factory for creating validation controllers from configuration.

    Configuration Options:
        provider (dict | str): Provider configuration passed to
            ValidatorProviderFactory, or the dotted path of a callable
            returning a provider (default: a default provider)
        continue_validation (bool): Default True
        ignore_empty_results (bool): Default True
    """

    def __init__(self, provider_factory: ValidatorProviderFactory | None = None):
        self.provider_factory = provider_factory or ValidatorProviderFactory()

    def create(self, **config: Any) -> ValidationController:
        provider = self._create_provider(config.get("provider"))

        controller = ValidationController(
            provider,
            continue_validation=config.get("continue_validation", True),
            ignore_empty_results=config.get("ignore_empty_results", True),
        )
        logger.info(f"Creating {controller!r}")
        return controller

    def _create_provider(self, provider_config: Any) -> ValidatorProvider:
        if provider_config is None:
            return self.provider_factory.create()
        if isinstance(provider_config, dict):
            return self.provider_factory.create(**provider_config)
        if isinstance(provider_config, str):
            if "." not in provider_config and ":" not in provider_config:
                raise ConfigError(
                    f"Provider must be a dotted path or a provider configuration, got {provider_config!r}",
                    context={"provider": provider_config},
                )
            provider = load_class(provider_config)()
            if not isinstance(provider, ValidatorProvider):
                raise ConfigError(
                    f"{provider_config} did not return a ValidatorProvider",
                    context={"provider": provider_config},
                )
            return provider
        raise ConfigError(f"Invalid provider configuration: {provider_config!r}")
