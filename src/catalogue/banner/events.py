"""Domain events for the Banner aggregate."""

from protean.fields import Boolean, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Banner")
class BannerCreated:
    __version__ = 1

    banner_id: Identifier(required=True)
    image: String(required=True)
    title: String()
    position: Integer(required=True)


@catalogue.event(part_of="Banner")
class BannerUpdated:
    __version__ = 1

    banner_id: Identifier(required=True)
    image: String(required=True)
    title: String()
    position: Integer(required=True)


@catalogue.event(part_of="Banner")
class BannerActivationToggled:
    __version__ = 1

    banner_id: Identifier(required=True)
    active: Boolean(required=True)
