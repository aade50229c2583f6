# ruff: noqa
# Whitelist for vulture dead code detection - not meant to be linted

# Pydantic configuration and validators (called by pydantic, not directly)
model_config  # Read by pydantic model metaclass
single_postal_code  # field_validator on CanonicalAddress.postal_code
upper_country_code  # field_validator on CanonicalAddress.country_code
admin_level_keys_match  # model_validator on CanonicalAddress
text_not_blank  # field_validator on GeocodeQuery.text
strip_trailing_slash  # field_validator on Settings.LOCATIONIQ_BASE_URL
normalize_log_level  # field_validator on Settings.LOG_LEVEL

# structlog processor signature (required by structlog)
method_name  # Required processor parameter

# Settings fields read through the settings instance
app_name
version

# Pytest fixtures (used indirectly through fixture system)
fake_transport
autocomplete_json
clean_provider_singleton
