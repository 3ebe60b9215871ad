"""Tests for the Banner aggregate."""

import pytest
from catalogue.banner.banner import Banner
from catalogue.banner.events import BannerActivationToggled, BannerCreated, BannerUpdated
from protean.exceptions import ValidationError


class TestBanner:
    def test_create(self):
        banner = Banner.create(image="/images/verao.jpg", title="Verão", position=2)

        assert banner.image == "/images/verao.jpg"
        assert banner.position == 2
        assert banner.active is True
        assert isinstance(banner._events[0], BannerCreated)

    def test_image_is_required(self):
        with pytest.raises(ValidationError):
            Banner.create(image=None)

    def test_update_keeps_unspecified_fields(self):
        banner = Banner.create(image="/images/verao.jpg", title="Verão", subtitle="Até 40%")
        banner.update(title="Inverno")

        assert banner.title == "Inverno"
        assert banner.subtitle == "Até 40%"
        assert isinstance(banner._events[-1], BannerUpdated)

    def test_toggle_active(self):
        banner = Banner.create(image="/images/verao.jpg")
        banner.toggle_active()

        assert banner.active is False
        assert isinstance(banner._events[-1], BannerActivationToggled)
