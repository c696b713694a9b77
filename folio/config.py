"""Site configuration for Folio.

The configuration lives in ``folio.yaml`` at the project root and is
validated once when a command starts. Keys use the site framework's
camelCase spelling (``trailingSlash``, ``defaultLocale``); snake_case
spellings are accepted as well.

Example ``folio.yaml``::

    site: https://dylanbritz.dev
    trailingSlash: ignore
    integrations: [vue, mdx]
    locales:
      en: en-US
      nl: nl-NL
    defaultLocale: en
    vite:
      plugins: [tailwindcss]
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .errors import ConfigurationError, format_pydantic_errors
from .utils import apply_trailing_slash, is_http_url

CONFIG_FILENAME = "folio.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "site": "https://example.com",
    "trailingSlash": "ignore",
    "integrations": ["vue", "mdx"],
    "locales": {"en": "en-US"},
    "defaultLocale": "en",
    "vite": {"plugins": ["tailwindcss"]},
}


class _Options(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ViteOptions(_Options):
    """Options handed to the bundler."""

    plugins: list[StrictStr] = Field(default_factory=list)


class SiteConfig(_Options):
    """Global site metadata.

    Attributes:
        site: Canonical base URL of the deployed site.
        trailing_slash: Policy for trailing slashes on page URLs.
        integrations: Ordered framework extensions to enable.
        locales: Mapping of locale code to regional tag.
        default_locale: Locale served without a URL prefix.
        vite: Bundler options.
    """

    site: StrictStr
    trailing_slash: Literal["ignore", "always", "never"] = "ignore"
    integrations: list[StrictStr] = Field(default_factory=list)
    locales: dict[StrictStr, StrictStr] = Field(default_factory=lambda: {"en": "en-US"})
    default_locale: StrictStr = "en"
    vite: ViteOptions = Field(default_factory=ViteOptions)

    @field_validator("site")
    @classmethod
    def check_site(cls, value: str) -> str:
        if not is_http_url(value):
            raise ValueError("site must be an absolute http(s) URL")
        return value

    @field_validator("integrations")
    @classmethod
    def check_integrations(cls, value: list[str]) -> list[str]:
        duplicates = sorted({name for name in value if value.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate integrations: {', '.join(duplicates)}")
        return value

    @model_validator(mode="after")
    def check_default_locale(self) -> SiteConfig:
        if not self.locales:
            raise ValueError("locales must not be empty")
        if self.default_locale not in self.locales:
            known = ", ".join(self.locales)
            raise ValueError(
                f"defaultLocale '{self.default_locale}' is not one of the locales ({known})"
            )
        return self

    def url_for(self, path: str, locale: str | None = None) -> str:
        """Build the canonical URL of a page.

        Non-default locales are prefixed with their code, and the
        trailing-slash policy is applied to the path.

        Args:
            path: Site-relative path such as ``/blog/hello``.
            locale: Locale code; defaults to the default locale.

        Returns:
            Absolute URL.

        Raises:
            KeyError: If the locale is not configured.
        """
        locale = locale or self.default_locale
        if locale not in self.locales:
            raise KeyError(f"Unknown locale '{locale}'")
        url_path = "/" + path.lstrip("/")
        if locale != self.default_locale:
            url_path = f"/{locale}{url_path}"
        url_path = apply_trailing_slash(url_path, self.trailing_slash)
        return f"{self.site.rstrip('/')}{url_path}"

    def alternates(self, path: str) -> dict[str, str]:
        """Map each regional tag to the page URL in that locale (for hreflang)."""
        return {tag: self.url_for(path, code) for code, tag in self.locales.items()}


def validate_config(data: Any, source_path: Path) -> SiteConfig:
    """Validate a raw configuration mapping.

    Args:
        data: Parsed configuration.
        source_path: File the configuration came from, for error messages.

    Raises:
        ConfigurationError: If the configuration is malformed.
    """
    if not isinstance(data, dict):
        raise ConfigurationError(source_path, "Configuration must be a mapping")
    try:
        return SiteConfig.model_validate(data)
    except PydanticValidationError as exc:
        errors = format_pydantic_errors(exc.errors())
        summary = "; ".join(f"{loc}: {msg}" for loc, msg in errors)
        raise ConfigurationError(
            source_path, f"Invalid configuration: {summary}", exc
        ) from exc


def load_config(project_root: Path) -> SiteConfig:
    """Load and validate ``folio.yaml`` from the project root.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    config_path = project_root / CONFIG_FILENAME
    if not config_path.exists():
        raise ConfigurationError(config_path, f"No {CONFIG_FILENAME} found")
    try:
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(config_path, f"Cannot read file: {exc}", exc) from exc
    except (yaml.YAMLError, ValueError) as exc:
        raise ConfigurationError(config_path, f"Invalid YAML: {exc}", exc) from exc
    return validate_config(loaded, config_path)
