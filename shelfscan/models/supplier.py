"""Pydantic model describing how to capture one supplier's product list."""

from typing import Any, Literal
from urllib.parse import urlparse

import soupsieve
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator, model_validator
from pydantic.functional_validators import ModelWrapValidatorHandler

from shelfscan.exceptions import ConfigError
from shelfscan.models.schedule import Schedule

SOURCE_SCHEMES: dict[str, tuple[str, ...]] = {
    'HTTP': ('http', 'https'),
    'FTP': ('ftp',),
    'SFTP': ('sftp',),
}

FIELD_SELECTORS: tuple[str, ...] = (
    'name_selector',
    'price_selector',
    'promotion_selector',
    'availability_selector',
)

# Column names from the older flat supplier table
LEGACY_KEYS: dict[str, str] = {
    'url': 'source_url',
    'product_selector': 'list_selector',
    'type': 'source_type',
}


class SupplierConfig(BaseModel):
    """Connection and selector configuration for a supplier.

    Field selectors are CSS selectors evaluated inside each element matched by
    list_selector, never against the whole document.

    Attributes:
        source_url: Absolute URL of the supplier's product listing
        list_selector: Selector matching one element per product (required)
        name_selector: Selector for the product name
        price_selector: Selector for the price text
        promotion_selector: Selector for a promotion badge or label
        availability_selector: Selector for stock/availability text
        name: Display name of the supplier
        source_type: Transport used to reach the source
        username: Optional login for the source
        password: Optional secret for the source, masked in repr and dumps
        schedule: When the supplier should be captured

    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    source_url: str = Field(description='Listing URL')
    list_selector: str = Field(description='Selector for each product element')
    name_selector: str | None = Field(default=None, description='Product name selector')
    price_selector: str | None = Field(default=None, description='Price selector')
    promotion_selector: str | None = Field(default=None, description='Promotion selector')
    availability_selector: str | None = Field(default=None, description='Availability selector')

    name: str = Field(default='', description='Supplier display name')
    source_type: Literal['HTTP', 'FTP', 'SFTP'] = 'HTTP'
    username: str | None = None
    password: SecretStr | None = None
    schedule: Schedule = Field(default_factory=Schedule)

    @field_validator('source_url')
    @classmethod
    def _check_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f'not an absolute URL: {value!r}')
        return value

    @field_validator('list_selector')
    @classmethod
    def _check_list_selector(cls, value: str) -> str:
        if not value:
            raise ValueError('list_selector is required')
        return _compile(value)

    @field_validator(*FIELD_SELECTORS, mode='before')
    @classmethod
    def _blank_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator(*FIELD_SELECTORS)
    @classmethod
    def _check_field_selector(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _compile(value)

    @field_validator('source_type', mode='before')
    @classmethod
    def _upper_source_type(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode='after')
    def _check_scheme(self) -> 'SupplierConfig':
        scheme = urlparse(self.source_url).scheme.lower()
        if scheme not in SOURCE_SCHEMES[self.source_type]:
            raise ConfigError(
                f'Invalid supplier config: source_url scheme {scheme!r} does not match source_type '
                f'{self.source_type}',
                fields=['source_url'],
            )
        return self

    @model_validator(mode='wrap')
    @classmethod
    def _raise_config_error(cls, data: Any, handler: ModelWrapValidatorHandler['SupplierConfig']) -> 'SupplierConfig':
        # Every construction path (constructor, model_validate, create) raises ConfigError
        try:
            return handler(data)
        except ValidationError as e:
            errors = e.errors()
            fields = ['.'.join(str(part) for part in err['loc']) for err in errors]
            details = '; '.join(f'{field}: {err["msg"]}' for field, err in zip(fields, errors))
            raise ConfigError(f'Invalid supplier config: {details}', fields=fields) from None

    @classmethod
    def create(cls, **data: Any) -> 'SupplierConfig':
        """Build a config, accepting legacy field names.

        Args:
            **data: Config fields (legacy names such as 'url' and 'product_selector' accepted)

        Returns:
            Validated SupplierConfig

        Raises:
            ConfigError: If any field is missing or invalid

        """
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'SupplierConfig':
        """Validate a raw mapping (e.g. one entry of a JSON config file).

        Raises:
            ConfigError: If any field is missing or invalid

        """
        data = {LEGACY_KEYS.get(key, key): value for key, value in data.items()}
        schedule = {key.removeprefix('schedule_'): data.pop(key) for key in list(data) if key.startswith('schedule_')}
        if schedule:
            schedule['kind'] = schedule.pop('type', 'daily')
            data.setdefault('schedule', {k: v for k, v in schedule.items() if v is not None})
        return cls.model_validate(data)

    def field_selectors(self) -> dict[str, str | None]:
        """Return the optional field selectors keyed by record field name."""
        return {name.removesuffix('_selector'): getattr(self, name) for name in FIELD_SELECTORS}


def _compile(selector: str) -> str:
    try:
        soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        raise ValueError(f'invalid CSS selector {selector!r}: {e}') from None
    return selector
