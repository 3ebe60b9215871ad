"""Banner aggregate: a home page carousel slide."""

from datetime import datetime

from protean.fields import Boolean, DateTime, Integer, String

from catalogue.domain import catalogue


@catalogue.aggregate
class Banner:
    """A promotional slide. Active banners are shown ordered by position."""

    image: String(required=True, max_length=500)
    title: String(max_length=255)
    subtitle: String(max_length=255)
    link: String(max_length=500)
    position: Integer(default=0, min_value=0)
    active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, image, title=None, subtitle=None, link=None, position=0, active=True):
        from catalogue.banner.events import BannerCreated

        now = datetime.now()
        banner = cls(
            image=image,
            title=title,
            subtitle=subtitle,
            link=link,
            position=position or 0,
            active=active,
            created_at=now,
            updated_at=now,
        )
        banner.raise_(
            BannerCreated(
                banner_id=banner.id,
                image=image,
                title=title,
                position=banner.position,
            )
        )
        return banner

    def update(self, image=None, title=None, subtitle=None, link=None, position=None):
        from catalogue.banner.events import BannerUpdated

        if image is not None:
            self.image = image
        if title is not None:
            self.title = title
        if subtitle is not None:
            self.subtitle = subtitle
        if link is not None:
            self.link = link
        if position is not None:
            self.position = position

        self.updated_at = datetime.now()

        self.raise_(
            BannerUpdated(
                banner_id=self.id,
                image=self.image,
                title=self.title,
                position=self.position,
            )
        )

    def toggle_active(self):
        from catalogue.banner.events import BannerActivationToggled

        self.active = not self.active
        self.updated_at = datetime.now()

        self.raise_(BannerActivationToggled(banner_id=self.id, active=self.active))
