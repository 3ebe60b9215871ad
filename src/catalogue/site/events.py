"""Domain events for the SiteConfig aggregate."""

from protean.fields import Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="SiteConfig")
class SiteConfigUpdated:
    __version__ = 1

    site_config_id: Identifier(required=True)
    changed_fields: String()
