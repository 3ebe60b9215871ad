"""SiteConfig aggregate: the storefront's branding, contact and social links.

There is at most one SiteConfig row; the admin console edits it in place.
"""

import re
from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from catalogue.domain import catalogue

_HEX_COLOUR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")

EDITABLE_FIELDS = (
    "site_name",
    "logo",
    "favicon",
    "tagline",
    "description",
    "primary_color",
    "secondary_color",
    "accent_color",
    "contact_email",
    "contact_phone",
    "contact_whatsapp",
    "social_instagram",
    "social_facebook",
    "social_twitter",
)


@catalogue.aggregate
class SiteConfig:
    site_name: String(required=True, max_length=100)
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
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def colours_must_be_hex(self):
        for field in ("primary_color", "secondary_color", "accent_color"):
            value = getattr(self, field)
            if value and not _HEX_COLOUR.match(value):
                raise ValidationError({field: [f"'{value}' is not a hex colour"]})

    def update(self, **changes):
        from catalogue.site.events import SiteConfigUpdated

        changed = []
        for field in EDITABLE_FIELDS:
            value = changes.get(field)
            if value is not None and value != getattr(self, field):
                setattr(self, field, value)
                changed.append(field)

        self.updated_at = datetime.now()

        self.raise_(
            SiteConfigUpdated(
                site_config_id=self.id,
                changed_fields=",".join(changed),
            )
        )
