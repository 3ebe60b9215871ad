"""Application tests for the checkout orchestrator over a real Cart Store and fake collaborators."""

import pytest
from catalogue.accessor.port import CatalogueSource, CheckoutConfig, ProductRecord, ShippingOption
from ordering.checkout.orchestrator import CheckoutOrchestrator
from ordering.checkout.state import CheckoutStep
from ordering.submission.port import OrderGateway
from protean.exceptions import ValidationError
from shared.errors import EmptyCartError, FetchError, NotFoundError, SubmissionError

M_BLACK = {"size": "M", "color": "Preto"}


@pytest.fixture()
def checkout(store, tshirt, start_checkout):
    store.add_item(tshirt, 1, M_BLACK)
    return start_checkout()


@pytest.fixture()
def ready_checkout(checkout, fill_customer, fill_address):
    """A checkout on the address step with every field filled in."""
    fill_customer(checkout)
    checkout.advance()
    fill_address(checkout)
    return checkout


class TestBegin:
    def test_empty_cart_cannot_start(self, start_checkout):
        with pytest.raises(EmptyCartError):
            start_checkout()

    def test_starts_collecting_customer_info(self, checkout):
        assert checkout.step == CheckoutStep.COLLECTING_CUSTOMER_INFO
        assert checkout.draft.dial_prefix == "+55"

    def test_quotes_shipping_for_the_cart(self, checkout):
        assert [o.id for o in checkout.shipping_options] == ["pac", "sedex"]
        assert checkout.draft.shipping_option_id == "pac"
        assert checkout.total_with_shipping == pytest.approx(49.9 + 19.9)


class TestOrderBumps:
    def test_offers_two_related_products_not_in_the_cart(self, checkout):
        assert [p.id for p in checkout.order_bumps] == ["2", "3"]
        assert checkout.order_bumps_visible

    def test_products_already_in_the_cart_are_skipped(self, store, tshirt, socks, start_checkout):
        store.add_item(tshirt, 1, M_BLACK)
        store.add_item(socks, 1)

        assert [p.id for p in start_checkout().order_bumps] == ["2", "4"]

    def test_disabled_by_config(self, store, tshirt, start_checkout):
        store.add_item(tshirt, 1, M_BLACK)
        assert start_checkout(order_bumps_enabled=False).order_bumps == []

    def test_position_controls_the_step_they_show_on(self, store, tshirt, start_checkout, fill_customer):
        store.add_item(tshirt, 1, M_BLACK)
        checkout = start_checkout(order_bumps_position="step2")
        assert not checkout.order_bumps_visible

        fill_customer(checkout)
        checkout.advance()

        assert checkout.order_bumps_visible

    def test_adding_a_bump_uses_quantity_one_and_first_options(self, checkout, store, sneakers):
        checkout.add_order_bump(sneakers)

        line = store.cart.find_item("2", {"size": "38"})
        assert line.quantity == 1
        assert [p.id for p in checkout.order_bumps] == ["3"]

    def test_adding_a_bump_requotes_shipping(self, checkout, sneakers):
        checkout.add_order_bump(sneakers)
        assert [o.id for o in checkout.shipping_options] == ["free", "pac", "sedex"]
        assert checkout.draft.shipping_option_id == "pac"


class TestCustomerStep:
    def test_advance_requires_customer_fields(self, checkout):
        with pytest.raises(ValidationError) as exc:
            checkout.advance()

        assert set(exc.value.messages) == {"name", "email", "phone", "tax_id"}
        assert checkout.step == CheckoutStep.COLLECTING_CUSTOMER_INFO

    def test_advance_and_back(self, checkout, fill_customer):
        fill_customer(checkout)

        checkout.advance()
        assert checkout.step == CheckoutStep.COLLECTING_ADDRESS

        checkout.back()
        assert checkout.step == CheckoutStep.COLLECTING_CUSTOMER_INFO
        assert checkout.draft.name == "Maria Silva"

    def test_fields_are_masked(self, checkout, fill_customer):
        fill_customer(checkout)
        assert checkout.draft.phone == "(11) 98765-4321"
        assert checkout.draft.tax_id == "123.456.789-09"


class TestAddressLookup:
    def test_complete_postal_code_starts_a_lookup(self, checkout):
        assert checkout.update_field("postal_code", "0131010") is None

        ticket = checkout.update_field("postal_code", "01310100")

        assert ticket is not None
        assert checkout.address_lookup_in_flight
        assert checkout.address_fields_read_only

    def test_address_fields_are_read_only_while_in_flight(self, checkout):
        checkout.update_field("postal_code", "01310-100")

        with pytest.raises(ValidationError):
            checkout.update_field("street", "Rua Augusta")

        checkout.update_field("number", "1000")
        assert checkout.draft.number == "1000"

    def test_success_populates_fields_and_releases_them(self, checkout, address_lookup):
        ticket = checkout.update_field("postal_code", "01310100")

        assert checkout.settle_address_lookup(ticket)

        assert address_lookup.calls == ["01310100"]
        assert checkout.draft.street == "Avenida Paulista"
        assert checkout.draft.city == "São Paulo"
        assert checkout.draft.state_code == "SP"
        assert not checkout.address_fields_read_only

    def test_not_found_leaves_prior_values(self, checkout):
        checkout.update_field("street", "Rua Augusta")
        ticket = checkout.update_field("postal_code", "99999999")

        checkout.settle_address_lookup(ticket)

        assert checkout.draft.street == "Rua Augusta"
        assert not checkout.address_fields_read_only
        assert checkout.notice is None

    def test_service_failure_is_a_notice(self, checkout, address_lookup):
        address_lookup.configure(available=False)
        checkout.update_field("street", "Rua Augusta")
        ticket = checkout.update_field("postal_code", "01310100")

        checkout.settle_address_lookup(ticket)

        assert checkout.draft.street == "Rua Augusta"
        assert "unavailable" in checkout.notice

    def test_superseded_lookup_is_ignored(self, checkout, paulista):
        first = checkout.update_field("postal_code", "01310100")
        second = checkout.update_field("postal_code", "20040020")

        assert not checkout.complete_address_lookup(first, result=paulista)
        assert checkout.draft.street is None
        assert checkout.address_lookup_in_flight

        assert checkout.complete_address_lookup(second, error=NotFoundError("CEP 20040020 not found"))
        assert not checkout.address_lookup_in_flight

    def test_shortening_the_code_cancels_the_lookup(self, checkout, paulista):
        ticket = checkout.update_field("postal_code", "01310100")
        checkout.update_field("postal_code", "0131010")

        assert not checkout.complete_address_lookup(ticket, result=paulista)
        assert not checkout.address_fields_read_only

    def test_result_after_exit_is_ignored(self, checkout, paulista):
        ticket = checkout.update_field("postal_code", "01310100")
        checkout.abandon()

        assert not checkout.complete_address_lookup(ticket, result=paulista)

    def test_fetch_error_passed_in(self, checkout):
        ticket = checkout.update_field("postal_code", "01310100")
        checkout.complete_address_lookup(ticket, error=FetchError("timeout"))
        assert checkout.notice


class TestShipping:
    def test_selection_kept_while_still_offered(self, checkout, store, socks):
        checkout.select_shipping_option("sedex")
        store.add_item(socks, 1)

        assert checkout.draft.shipping_option_id == "sedex"
        assert checkout.shipping_price == 34.9

    def test_selection_falls_back_when_no_longer_offered(self, checkout, store):
        store.update_quantity("1", M_BLACK, 5)
        checkout.select_shipping_option("free")
        assert checkout.total_with_shipping == pytest.approx(249.5)

        store.update_quantity("1", M_BLACK, 1)

        assert [o.id for o in checkout.shipping_options] == ["pac", "sedex"]
        assert checkout.draft.shipping_option_id == "pac"

    def test_unknown_option_cannot_be_selected(self, checkout):
        with pytest.raises(ValidationError):
            checkout.select_shipping_option("free")

    def test_stale_quote_is_dropped(self, checkout, store, socks, snapshot):
        ticket = checkout.request_shipping()
        store.add_item(socks, 1)

        assert not checkout.apply_shipping_options(ticket, snapshot.get_shipping_options())

    def test_quote_is_refiltered_against_the_current_total(self, checkout, snapshot):
        ticket = checkout.request_shipping()
        every_option = snapshot.get_shipping_options()

        assert checkout.apply_shipping_options(ticket, every_option)

        assert [o.id for o in checkout.shipping_options] == ["pac", "sedex"]


class _FixedCatalogue(CatalogueSource):
    """One product at 50.00 and free shipping without a minimum."""

    product = ProductRecord(id="A", name="Produto A", slug="produto-a", price=50.0, stock=10)

    def get_products(self):
        return [self.product]

    def get_banners(self):
        return []

    def get_reviews(self, product_id):
        return []

    def related_product_ids(self, product_id):
        return []

    def get_shipping_options(self):
        return [ShippingOption(id="free", name="Grátis", delivery_time="7 dias", price=0.0, min_purchase=0)]

    def get_checkout_config(self):
        return CheckoutConfig()

    def get_site_config(self):
        raise NotImplementedError

    get_store_info = get_offers_config = get_about_config = get_site_config


def test_free_shipping_total(store, address_lookup, gateway):
    catalogue = _FixedCatalogue()
    store.add_item(catalogue.product, 2)

    checkout = CheckoutOrchestrator.begin(store, catalogue, address_lookup, gateway)

    assert checkout.subtotal == 100.0
    assert checkout.draft.shipping_option_id == "free"
    assert checkout.total_with_shipping == 100.0


class TestSubmit:
    def test_submit_sends_the_order_once(self, ready_checkout, gateway):
        payment = ready_checkout.submit()

        assert len(gateway.calls) == 1
        payload = gateway.calls[0].to_payload()
        assert payload["items"] == [{"productId": "1", "quantity": 1, "selectedVariations": M_BLACK}]
        assert payload["customer"]["cpf"] == "123.456.789-09"
        assert payload["shipping"]["zipCode"] == "01310-100"
        assert payload["shipping"]["state"] == "SP"
        assert payload["shippingOption"] == "pac"

        assert ready_checkout.step == CheckoutStep.AWAITING_PAYMENT
        assert ready_checkout.payment.order_id == payment.order_id

    def test_submit_blocked_without_shipping_option(self, ready_checkout, gateway):
        ready_checkout.shipping_options = []
        ready_checkout.draft.shipping_option_id = None

        with pytest.raises(ValidationError) as exc:
            ready_checkout.submit()

        assert "shipping_option_id" in exc.value.messages
        assert gateway.calls == []

    @pytest.mark.parametrize("field", ["street", "number", "neighborhood", "city", "state", "postal_code"])
    def test_clearing_any_address_field_blocks_submission(self, ready_checkout, gateway, field):
        ready_checkout.update_field(field, "")

        with pytest.raises(ValidationError):
            ready_checkout.submit()

        assert gateway.calls == []
        assert ready_checkout.step == CheckoutStep.COLLECTING_ADDRESS

    def test_failure_keeps_step_draft_and_cart(self, ready_checkout, gateway, store):
        gateway.configure(should_succeed=False, failure_reason="HTTP 503")

        with pytest.raises(SubmissionError):
            ready_checkout.submit()

        assert ready_checkout.step == CheckoutStep.COLLECTING_ADDRESS
        assert ready_checkout.draft.street == "Avenida Paulista"
        assert store.get_item_count() == 1
        assert ready_checkout.notice
        assert not ready_checkout.is_submitting

    def test_customer_may_retry_after_a_failure(self, ready_checkout, gateway):
        gateway.configure(should_succeed=False)
        with pytest.raises(SubmissionError):
            ready_checkout.submit()

        gateway.configure(should_succeed=True)
        ready_checkout.submit()

        assert len(gateway.calls) == 2
        assert ready_checkout.step == CheckoutStep.AWAITING_PAYMENT

    def test_second_submit_while_in_flight_is_rejected(self, ready_checkout, gateway):
        inner_errors = []

        class _ReentrantGateway(OrderGateway):
            def submit_order(self, submission):
                try:
                    ready_checkout.submit()
                except SubmissionError as exc:
                    inner_errors.append(exc)
                return gateway.submit_order(submission)

        ready_checkout.order_gateway = _ReentrantGateway()
        ready_checkout.submit()

        assert len(inner_errors) == 1
        assert len(gateway.calls) == 1

    def test_form_is_locked_after_submission(self, ready_checkout):
        ready_checkout.submit()
        with pytest.raises(ValidationError):
            ready_checkout.update_field("name", "Outra Pessoa")


class TestEnding:
    def test_complete_clears_the_cart(self, ready_checkout, store):
        ready_checkout.submit()
        ready_checkout.complete()

        assert ready_checkout.step == CheckoutStep.COMPLETED
        assert store.is_empty
        assert not ready_checkout.redirect_required

    def test_complete_before_payment_is_rejected(self, ready_checkout):
        with pytest.raises(ValidationError):
            ready_checkout.complete()

    def test_emptying_the_cart_redirects_without_submitting(self, ready_checkout, store, gateway):
        store.remove_item("1", M_BLACK)

        assert ready_checkout.step == CheckoutStep.EXITED
        assert ready_checkout.redirect_required
        assert gateway.calls == []

    def test_abandon_discards_the_draft(self, checkout, store):
        checkout.abandon()

        assert checkout.step == CheckoutStep.EXITED
        assert checkout.draft is None
        assert not store.is_empty
        with pytest.raises(ValidationError):
            checkout.update_field("name", "Maria")

    def test_exited_checkout_ignores_cart_changes(self, checkout, store, socks):
        checkout.abandon()
        store.add_item(socks, 1)
        assert checkout.step == CheckoutStep.EXITED

    def test_clearing_the_cart_after_submission_keeps_the_payment(self, ready_checkout, store):
        payment = ready_checkout.submit()

        store.clear_cart()

        assert ready_checkout.step == CheckoutStep.AWAITING_PAYMENT
        assert not ready_checkout.redirect_required
        assert ready_checkout.payment.order_id == payment.order_id

        ready_checkout.complete()
        assert ready_checkout.step == CheckoutStep.COMPLETED

    def test_adding_an_item_after_submission_keeps_the_promised_total(self, ready_checkout, store, socks):
        payment = ready_checkout.submit()
        option = ready_checkout.draft.shipping_option_id
        options = list(ready_checkout.shipping_options)

        store.add_item(socks, 1)

        assert ready_checkout.draft.shipping_option_id == option
        assert ready_checkout.shipping_options == options
        assert ready_checkout.total_with_shipping == payment.amount

    def test_late_shipping_quote_after_submission_is_ignored(self, ready_checkout, snapshot):
        ticket = ready_checkout.request_shipping()
        ready_checkout.submit()

        assert not ready_checkout.apply_shipping_options(ticket, snapshot.get_shipping_options())


class TestDirectMode:
    def test_single_form_submits_from_step_one(self, store, tshirt, start_checkout, fill_customer, fill_address):
        store.add_item(tshirt, 1, M_BLACK)
        checkout = start_checkout(mode="direct")

        fill_customer(checkout)
        fill_address(checkout)
        checkout.submit()

        assert checkout.step == CheckoutStep.AWAITING_PAYMENT

    def test_direct_mode_has_no_advance(self, store, tshirt, start_checkout, fill_customer):
        store.add_item(tshirt, 1, M_BLACK)
        checkout = start_checkout(mode="direct")
        fill_customer(checkout)

        with pytest.raises(ValidationError):
            checkout.advance()
