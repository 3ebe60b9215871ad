"""Admin console site configuration: command and handler."""

from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.site.site_config import EDITABLE_FIELDS, SiteConfig


@catalogue.command(part_of="SiteConfig")
class UpdateSiteConfig:
    site_name: String(max_length=100)
    logo: String(max_length=500)
    favicon: String(max_length=500)
    tagline: String(max_length=255)
    description: Text()
    primary_color: String(max_length=7)
    secondary_color: String(max_length=7)
    accent_color: String(max_length=7)
    contact_email: String(max_length=255)
    contact_phone: String(max_length=30)
    contact_whatsapp: String(max_length=30)
    social_instagram: String(max_length=500)
    social_facebook: String(max_length=500)
    social_twitter: String(max_length=500)


def current_site_config():
    """Return the single SiteConfig row, or None before the first save."""
    results = current_domain.repository_for(SiteConfig)._dao.query.all().items
    return results[0] if results else None


@catalogue.command_handler(part_of=SiteConfig)
class ManageSiteConfigHandler:
    @handle(UpdateSiteConfig)
    def update_site_config(self, command):
        repo = current_domain.repository_for(SiteConfig)
        changes = {field: getattr(command, field) for field in EDITABLE_FIELDS}

        config = current_site_config()
        if config is None:
            config = SiteConfig(site_name=changes.pop("site_name") or "Vitrine")
        config.update(**changes)
        repo.add(config)
        return str(config.id)
