"""Admin console banner management: commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, Integer, String
from protean.utils.globals import current_domain

from catalogue.banner.banner import Banner
from catalogue.domain import catalogue


@catalogue.command(part_of="Banner")
class CreateBanner:
    image: String(required=True, max_length=500)
    title: String(max_length=255)
    subtitle: String(max_length=255)
    link: String(max_length=500)
    position: Integer(default=0)
    active: Boolean(default=True)


@catalogue.command(part_of="Banner")
class UpdateBanner:
    banner_id: Identifier(required=True)
    image: String(max_length=500)
    title: String(max_length=255)
    subtitle: String(max_length=255)
    link: String(max_length=500)
    position: Integer()


@catalogue.command(part_of="Banner")
class DeleteBanner:
    banner_id: Identifier(required=True)


@catalogue.command(part_of="Banner")
class ToggleBannerActive:
    banner_id: Identifier(required=True)


@catalogue.command_handler(part_of=Banner)
class ManageBannersHandler:
    @handle(CreateBanner)
    def create_banner(self, command):
        banner = Banner.create(
            image=command.image,
            title=command.title,
            subtitle=command.subtitle,
            link=command.link,
            position=command.position,
            active=command.active,
        )
        current_domain.repository_for(Banner).add(banner)
        return str(banner.id)

    @handle(UpdateBanner)
    def update_banner(self, command):
        repo = current_domain.repository_for(Banner)
        banner = repo.get(command.banner_id)
        banner.update(
            image=command.image,
            title=command.title,
            subtitle=command.subtitle,
            link=command.link,
            position=command.position,
        )
        repo.add(banner)

    @handle(DeleteBanner)
    def delete_banner(self, command):
        repo = current_domain.repository_for(Banner)
        repo._dao.delete(repo.get(command.banner_id))

    @handle(ToggleBannerActive)
    def toggle_banner_active(self, command):
        repo = current_domain.repository_for(Banner)
        banner = repo.get(command.banner_id)
        banner.toggle_active()
        repo.add(banner)
