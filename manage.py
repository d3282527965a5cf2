from decimal import Decimal

import click
from faker import Faker

from app.core import security
from app.core.database import Base, SessionLocal, engine
from app.models.internal_model import (
    ROLE_ADMIN,
    Category,
    CategoryAttribute,
    Product,
    User,
)
from app.utils.slug import generate_slug

fake = Faker()


def _options(*values):
    return [{"value": value} for value in values]


# name -> attribute definitions declared on the root and on each child
DEMO_TREE = {
    "Electronics": {
        "attributes": [
            {"key": "brand", "label": "Brand", "type": "select",
             "options": _options("Acme", "Globex", "Initech"), "order": 1},
            {"key": "ram", "label": "RAM", "type": "select",
             "options": _options("8GB", "16GB"), "order": 2},
        ],
        "children": {
            "Laptops": [
                {"key": "ram", "label": "Memory", "type": "multi-select",
                 "options": _options("8GB", "16GB", "32GB"), "order": 2},
                {"key": "screen_size", "label": "Screen size", "type": "number-range",
                 "unit": "inch", "min": 11, "max": 18, "order": 3},
            ],
            "Phones": [
                {"key": "storage", "label": "Storage", "type": "select",
                 "options": _options("128GB", "256GB", "512GB"), "order": 3},
            ],
        },
    },
    "Home": {
        "attributes": [
            {"key": "color", "label": "Color", "type": "select",
             "options": _options("black", "white", "grey"), "order": 1},
        ],
        "children": {"Kitchen": [], "Furniture": []},
    },
}


@click.group()
def cli():
    """Storefront management script."""
    pass


@cli.command()
def create_db():
    """Creates the database tables."""
    Base.metadata.create_all(bind=engine)
    click.echo("Database tables created.")


@cli.command()
def drop_db():
    """Drops the database tables."""
    Base.metadata.drop_all(bind=engine)
    click.echo("Database tables dropped.")


def _add_category(db, name, parent=None, attributes=None):
    category = Category(name=name, slug=generate_slug(name), parent_id=parent and parent.id)
    db.add(category)
    db.flush()
    if attributes:
        db.add(CategoryAttribute(category_id=category.id, attributes=attributes))
    return category


def _random_attributes(definitions):
    values = {}
    for definition in definitions:
        if definition.get("options"):
            values[definition["key"]] = fake.random_element(definition["options"])["value"]
        elif definition["type"] == "number-range":
            values[definition["key"]] = fake.random_int(
                definition.get("min", 0), definition.get("max", 100)
            )
    return values


@cli.command()
@click.option("--products", default=5, help="Number of products per leaf category.")
def populate_data(products):
    """Populates the database with a demo category tree and products."""
    db = SessionLocal()
    try:
        if db.query(Category).first():
            click.echo("Categories already exist. Aborting.")
            return

        for root_name, root in DEMO_TREE.items():
            parent = _add_category(db, root_name, attributes=root["attributes"])
            for child_name, child_attributes in root["children"].items():
                leaf = _add_category(db, child_name, parent, child_attributes)
                definitions = {
                    d["key"]: d for d in root["attributes"] + child_attributes
                }
                for _ in range(products):
                    name = f"{child_name[:-1]} {fake.unique.word().title()}"
                    price = Decimal(fake.random_int(20, 2000))
                    stock = fake.random_int(0, 30)
                    db.add(
                        Product(
                            name=name,
                            slug=generate_slug(name),
                            description=fake.sentence(nb_words=12),
                            price=price,
                            compare_at_price=(
                                price + Decimal(fake.random_int(5, 200))
                                if fake.boolean(chance_of_getting_true=30)
                                else None
                            ),
                            category_id=leaf.id,
                            sku=fake.unique.bothify("SKU-####-??").upper(),
                            stock_quantity=stock,
                            in_stock=stock > 0,
                            is_featured=fake.boolean(chance_of_getting_true=20),
                            is_sponsored=fake.boolean(chance_of_getting_true=10),
                            attributes=_random_attributes(definitions.values()),
                        )
                    )
        db.commit()
        click.echo("Demo data added successfully!")

    except Exception as e:
        db.rollback()
        click.echo(f"An error occurred: {e}")
    finally:
        db.close()


@cli.command()
@click.option("--phone", prompt=True, help="Phone number used to log in.")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password for the new user.",
)
@click.option("--first-name", prompt=True, default="Admin")
@click.option("--last-name", prompt=True, default="User")
@click.option("--email", default=None, help="Optional e-mail address.")
def create_admin(phone, password, first_name, last_name, email):
    """Creates an administrator account."""
    db = SessionLocal()
    try:
        if db.query(User).filter(User.phone_number == phone).first():
            click.echo(f"User with phone '{phone}' already exists.")
            return

        user = User(
            phone_number=phone,
            password_hash=security.get_password_hash(password),
            email=email.lower() if email else None,
            first_name=first_name,
            last_name=last_name,
            role=ROLE_ADMIN,
        )
        db.add(user)
        db.commit()
        click.echo(f"Admin user '{phone}' created successfully!")

    except Exception as e:
        db.rollback()
        click.echo(f"An error occurred: {e}")
    finally:
        db.close()


@cli.command()
@click.argument("phone")
@click.option("--minutes", default=60, help="Lifetime of the token in minutes.")
def create_token(phone, minutes):
    """Prints an access token for an existing user."""
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.phone_number == phone).first()
        if not user:
            click.echo(f"User with phone '{phone}' not found.")
            return
        click.echo(f"Access Token: {security.create_access_token(user, minutes)}")
    finally:
        db.close()


if __name__ == "__main__":
    cli()
