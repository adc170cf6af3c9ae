"""New product form modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Input, Static

from cafe_pos.catalog import Catalog
from cafe_pos.constant import SUGGESTED_CATEGORIES
from cafe_pos.errors import ValidationError
from cafe_pos.models import Product


class ProductFormModal(ModalScreen[Product | None]):
    """Collect name, category and price, then add the product to the catalog."""

    BINDINGS = [
        ("escape", "close", "Close"),
    ]

    CSS = """
    ProductFormModal {
        align: center middle;
        background: $background 60%;
    }

    #product-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #product-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #product-error {
        color: #ffb3b3;
        margin-top: 1;
    }

    #product-help {
        margin-top: 1;
        color: $text-muted;
    }
    """

    def __init__(self, catalog: Catalog) -> None:
        super().__init__()
        self.catalog = catalog

    def compose(self) -> ComposeResult:
        with Container(id="product-dialog"):
            yield Static("Nouveau produit", id="product-title")
            yield Input(placeholder="Nom", id="product-name")
            yield Input(value=SUGGESTED_CATEGORIES[0], placeholder="Catégorie", id="product-category")
            yield Input(placeholder="Prix (ex. 3.50)", id="product-price")
            yield Static(id="product-error")
            yield Static(
                f"Suggestions: {', '.join(SUGGESTED_CATEGORIES)}\nTab next field. Enter save. Esc cancel.",
                id="product-help",
            )

    def on_mount(self) -> None:
        self.query_one("#product-name", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        name = self.query_one("#product-name", Input).value
        category = self.query_one("#product-category", Input).value
        price = self.query_one("#product-price", Input).value
        try:
            product = self.catalog.add_product(name, category, price)
        except ValidationError as exc:
            self.query_one("#product-error", Static).update(str(exc))
            return
        self.dismiss(product)

    def action_close(self) -> None:
        self.dismiss(None)
