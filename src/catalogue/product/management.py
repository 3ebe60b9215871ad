"""Admin console product management: commands and handler."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    slug: String(required=True, max_length=200)
    price: Float(required=True)
    discount_price: Float()
    category: String(max_length=100)
    subcategory: String(max_length=100)
    main_image: String(max_length=500)
    images: Text()
    description: Text()
    variations: Text()
    stock: Integer(default=0)
    active: Boolean(default=True)


@catalogue.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    slug: String(max_length=200)
    price: Float()
    discount_price: Float()
    category: String(max_length=100)
    subcategory: String(max_length=100)
    main_image: String(max_length=500)
    images: Text()
    description: Text()
    variations: Text()
    stock: Integer()


@catalogue.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@catalogue.command(part_of="Product")
class ToggleProductActive:
    product_id: Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class ManageProductsHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            slug=command.slug,
            price=command.price,
            discount_price=command.discount_price,
            category=command.category,
            subcategory=command.subcategory,
            main_image=command.main_image,
            images=command.images,
            description=command.description,
            variations=command.variations,
            stock=command.stock or 0,
            active=command.active,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product.created", product_id=str(product.id), slug=product.slug)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update(
            name=command.name,
            slug=command.slug,
            price=command.price,
            discount_price=command.discount_price,
            category=command.category,
            subcategory=command.subcategory,
            main_image=command.main_image,
            images=command.images,
            description=command.description,
            variations=command.variations,
            stock=command.stock,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("product.deleted", product_id=str(command.product_id))

    @handle(ToggleProductActive)
    def toggle_product_active(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.toggle_active()
        repo.add(product)
