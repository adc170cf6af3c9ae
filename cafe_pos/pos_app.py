"""Main Textual app class."""

from __future__ import annotations

from datetime import date

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from cafe_pos.cart import grand_total, tax_amount
from cafe_pos.config import TAX_RATE
from cafe_pos.constant import ALL_CATEGORIES_LABEL
from cafe_pos.date_range_modal import DateRangeModal
from cafe_pos.debug_log import log_debug
from cafe_pos.errors import IllegalTransition, InvalidCheckout
from cafe_pos.kitchen import minutes_waiting
from cafe_pos.ledger import check_checkout
from cafe_pos.login_modal import LoginModal
from cafe_pos.models import CartLine, Order, Product
from cafe_pos.printer import check_printer_dependencies
from cafe_pos.product_form_modal import ProductFormModal
from cafe_pos.receipt import format_price
from cafe_pos.receipt_modal import ReceiptModal
from cafe_pos.rendering import format_bar, format_cart_line, format_order_card
from cafe_pos.reporting import ALL_WAITERS, SalesReport, build_report, default_range
from cafe_pos.store import PosStore

VIEWS = ("HOME", "PRODUCTS", "KITCHEN", "DASHBOARD")
VIEW_TITLES = {
    "HOME": "Caisse",
    "PRODUCTS": "Produits",
    "KITCHEN": "Cuisine",
    "DASHBOARD": "Tableau de bord",
}
RANGE_PRESETS: list[tuple[str, int]] = [
    ("7 derniers jours", 7),
    ("Aujourd'hui", 0),
    ("30 derniers jours", 30),
]


class CafePosApp(App):
    """A Textual app for taking café orders and following them to the kitchen."""

    TITLE = "Lumière Café"
    SUB_TITLE = "Point de vente"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #left-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #right-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #left-body, #right-body {
        height: 1fr;
        overflow-y: auto;
        padding: 0 1;
    }

    #status-bar {
        height: 2;
        padding: 0 1;
        background: $panel;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    view = reactive("HOME")

    BINDINGS = [
        ("f1", "show_view('HOME')", "Caisse"),
        ("f2", "show_view('PRODUCTS')", "Produits"),
        ("f3", "show_view('KITCHEN')", "Cuisine"),
        ("f4", "show_view('DASHBOARD')", "Tableau"),
        ("up", "move_selection(-1)", "Previous"),
        ("down", "move_selection(1)", "Next"),
        ("enter", "primary_action", "Select"),
        Binding("ctrl+s", "checkout", "Encaisser", priority=True),
        ("ctrl+l", "logout", "Déconnexion"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, store: PosStore | None = None) -> None:
        super().__init__()
        self.pos = store or PosStore()
        self.system_status = ""
        self.category_index = 0
        self.catalog_index = 0
        self.cart_index: int | None = None
        self.product_index = 0
        self.active_index = 0
        self.ready_index = 0
        self.range_index = 0
        self.custom_range: tuple[date, date] | None = None
        self.waiter_filter_index = 0
        log_debug("app_init")

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="left-pane"):
                yield Static(id="left-title", classes="pane-title")
                yield Static(id="left-body")
            with Vertical(id="right-pane"):
                yield Static(id="right-title", classes="pane-title")
                yield Static(id="right-body")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        self.pos.initialize()
        _, msg = check_printer_dependencies()
        self.system_status = msg
        log_debug(f"on_mount printer_status={msg!r}")
        self._refresh_all()
        self._open_login()

    def watch_view(self, _old: str, _new: str) -> None:
        self._refresh_all()

    # Session

    def _open_login(self) -> None:
        self.push_screen(LoginModal(self.pos.session), self._on_login)

    def _on_login(self, waiter_id: str | None) -> None:
        waiter = self.pos.session.active
        if waiter is None:
            self._open_login()
            return
        self.sub_title = waiter.name
        self.system_status = f"Bonjour {waiter.name}"
        log_debug(f"session_start waiter_id={waiter_id}")
        self._refresh_all()

    def action_logout(self) -> None:
        if self._modal_open():
            return
        self.pos.session.logout()
        self.sub_title = self.SUB_TITLE
        self.system_status = "Déconnecté"
        self._refresh_all()
        self._open_login()

    # Key handling

    def _modal_open(self) -> bool:
        return isinstance(self.screen, ModalScreen)

    def on_key(self, event: Key) -> None:
        if self._modal_open():
            return
        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        key = event.character.lower()
        handled = False
        if self.view == "HOME":
            handled = self._home_key(key)
        elif self.view == "PRODUCTS":
            handled = self._products_key(key)
        elif self.view == "KITCHEN":
            handled = self._kitchen_key(key)
        elif self.view == "DASHBOARD":
            handled = self._dashboard_key(key)
        if handled:
            event.stop()

    def _home_key(self, key: str) -> bool:
        if key == "c":
            choices = self._category_choices()
            self.category_index = (self.category_index + 1) % len(choices)
            self.catalog_index = 0
        elif key == "j":
            self._move_cart_selection(1)
        elif key == "k":
            self._move_cart_selection(-1)
        elif key in {"+", "="}:
            self._change_selected_quantity(1)
        elif key == "-":
            self._change_selected_quantity(-1)
        elif key == "d":
            line = self._selected_cart_line()
            if line is None:
                return True
            self.pos.cart.remove_item(line.product_id)
        elif key == "x":
            self.pos.cart.clear()
            self.cart_index = None
            self.system_status = "Panier vidé"
        else:
            return False
        self._refresh_all()
        return True

    def _products_key(self, key: str) -> bool:
        if key == "a":
            self.push_screen(ProductFormModal(self.pos.catalog), self._on_product_saved)
            return True
        if key == "d":
            products = self.pos.catalog.list_products()
            if not products:
                return True
            product = products[min(self.product_index, len(products) - 1)]
            self.pos.catalog.remove_product(product.product_id)
            self.system_status = f"Supprimé: {product.name}"
            self._refresh_all()
            return True
        return False

    def _kitchen_key(self, key: str) -> bool:
        board = self.pos.kitchen.ready_board()
        if key in {"j", "k"}:
            if not board:
                return True
            delta = 1 if key == "j" else -1
            self.ready_index = (self.ready_index + delta) % len(board)
        elif key == "a":
            if not board:
                return True
            order = board[min(self.ready_index, len(board) - 1)]
            self._advance(order, archive=True)
        else:
            return False
        self._refresh_all()
        return True

    def _dashboard_key(self, key: str) -> bool:
        if key == "r":
            if self.custom_range is None:
                self.range_index = (self.range_index + 1) % len(RANGE_PRESETS)
            self.custom_range = None
        elif key == "p":
            start, end = self._report_bounds()
            self.push_screen(DateRangeModal(start, end), self._on_range_chosen)
            return True
        elif key == "w":
            self.waiter_filter_index = (self.waiter_filter_index + 1) % len(self._waiter_filters())
        else:
            return False
        self._refresh_all()
        return True

    # Actions

    def action_show_view(self, view: str) -> None:
        if self._modal_open() or view not in VIEWS:
            return
        self.view = view

    def action_move_selection(self, delta: int) -> None:
        if self._modal_open():
            return
        if self.view == "HOME":
            count = len(self._visible_products())
            if count:
                self.catalog_index = (self.catalog_index + delta) % count
        elif self.view == "PRODUCTS":
            count = len(self.pos.catalog.list_products())
            if count:
                self.product_index = (self.product_index + delta) % count
        elif self.view == "KITCHEN":
            count = len(self.pos.kitchen.active_board())
            if count:
                self.active_index = (self.active_index + delta) % count
        self._refresh_all()

    def action_primary_action(self) -> None:
        if self._modal_open():
            return
        if self.view == "HOME":
            products = self._visible_products()
            if not products:
                return
            product = products[min(self.catalog_index, len(products) - 1)]
            self.pos.cart.add_item(product)
            self.cart_index = self._cart_position(product.product_id)
            self.system_status = f"Ajouté: {product.name}"
        elif self.view == "KITCHEN":
            board = self.pos.kitchen.active_board()
            if not board:
                return
            self._advance(board[min(self.active_index, len(board) - 1)], archive=False)
        self._refresh_all()

    def action_checkout(self) -> None:
        if self._modal_open():
            return
        try:
            check_checkout(self.pos.cart, self.pos.session.active)
        except InvalidCheckout as exc:
            self.system_status = str(exc)
            log_debug(f"checkout_blocked reason={exc}")
            self._refresh_all()
            return

        order = self.pos.checkout()
        if order is None:
            return
        self.cart_index = None
        self.system_status = f"Commande #{order.order_number} encaissée: {format_price(order.total)}"
        self._refresh_all()
        self.push_screen(ReceiptModal(order))

    def _advance(self, order: Order, archive: bool) -> None:
        try:
            if archive:
                self.pos.kitchen.archive(order.order_id)
                self.system_status = f"Commande #{order.order_number} servie"
            else:
                self.pos.kitchen.mark_ready(order.order_id)
                self.system_status = f"Commande #{order.order_number} prête"
        except IllegalTransition as exc:
            self.system_status = str(exc)
            log_debug(f"kitchen_transition_rejected order_id={order.order_id} error={exc}")

    def _on_range_chosen(self, bounds: tuple[date, date] | None) -> None:
        if bounds is not None:
            self.custom_range = bounds
            log_debug(f"dashboard_range start={bounds[0]} end={bounds[1]}")
        self._refresh_all()

    def _on_product_saved(self, product: Product | None) -> None:
        if product is not None:
            self.system_status = f"Ajouté au catalogue: {product.name}"
        self._refresh_all()

    # Selection helpers

    def _category_choices(self) -> list[str]:
        return [ALL_CATEGORIES_LABEL, *self.pos.catalog.categories()]

    def _visible_products(self) -> list[Product]:
        choices = self._category_choices()
        if self.category_index >= len(choices):
            self.category_index = 0
        category = choices[self.category_index]
        products = self.pos.catalog.list_products()
        if category == ALL_CATEGORIES_LABEL:
            return products
        return [p for p in products if p.category == category]

    def _cart_position(self, product_id: str) -> int | None:
        for idx, line in enumerate(self.pos.cart.lines):
            if line.product_id == product_id:
                return idx
        return None

    def _selected_cart_line(self) -> CartLine | None:
        lines = self.pos.cart.lines
        if self.cart_index is None or not (0 <= self.cart_index < len(lines)):
            return None
        return lines[self.cart_index]

    def _move_cart_selection(self, delta: int) -> None:
        lines = self.pos.cart.lines
        if not lines:
            return
        if self.cart_index is None:
            self.cart_index = 0 if delta > 0 else len(lines) - 1
        else:
            self.cart_index = (self.cart_index + delta) % len(lines)

    def _change_selected_quantity(self, delta: int) -> None:
        line = self._selected_cart_line()
        if line is None:
            return
        self.pos.cart.set_quantity_delta(line.product_id, delta)

    def _waiter_filters(self) -> list[tuple[str, str]]:
        filters = [(ALL_WAITERS, "Tous les serveurs")]
        filters.extend((w.waiter_id, w.name) for w in self.pos.session.waiters)
        return filters

    def _report_bounds(self) -> tuple[date, date]:
        if self.custom_range is not None:
            return self.custom_range
        return default_range(days=RANGE_PRESETS[self.range_index][1])

    def _current_report(self) -> tuple[SalesReport, str, str]:
        start, end = self._report_bounds()
        if self.custom_range is not None:
            range_label = f"{start:%d/%m/%Y} - {end:%d/%m/%Y}"
        else:
            range_label = RANGE_PRESETS[self.range_index][0]
        waiter_id, waiter_label = self._waiter_filters()[self.waiter_filter_index]
        report = build_report(self.pos.ledger.list_orders(), start, end, waiter_id)
        return report, range_label, waiter_label

    # Rendering

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)

    def _render_list(self, widget: Static, rows: list[Text], selected: int | None, reserved: int = 0) -> Text:
        start, end = self._window_bounds(len(rows), self._visible_rows(widget) - reserved, selected)
        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            pointer = "➤ " if idx == selected else "  "
            lines.append(pointer)
            lines.append_text(rows[idx])
        if end < len(rows):
            lines.append("\n⋮", style="dim")
        return lines

    def _refresh_all(self) -> None:
        try:
            left_title = self.query_one("#left-title", Static)
            left_body = self.query_one("#left-body", Static)
            right_title = self.query_one("#right-title", Static)
            right_body = self.query_one("#right-body", Static)
        except NoMatches:
            return

        if self.view == "HOME":
            self._refresh_home(left_title, left_body, right_title, right_body)
        elif self.view == "PRODUCTS":
            self._refresh_products(left_title, left_body, right_title, right_body)
        elif self.view == "KITCHEN":
            self._refresh_kitchen(left_title, left_body, right_title, right_body)
        else:
            self._refresh_dashboard(left_title, left_body, right_title, right_body)
        self._refresh_status_bar()

    def _refresh_home(self, left_title: Static, left_body: Static, right_title: Static, right_body: Static) -> None:
        choices = self._category_choices()
        products = self._visible_products()
        if products:
            self.catalog_index = min(self.catalog_index, len(products) - 1)
        left_title.update(f"Catalogue · {choices[self.category_index]} (C pour changer)")
        rows = []
        for product in products:
            row = Text(f"{product.name:<22.22} ")
            row.append(format_price(product.price), style="bold")
            rows.append(row)
        left_body.update(self._render_list(left_body, rows, self.catalog_index) if rows else "(catalogue vide)")

        cart = self.pos.cart
        right_title.update(f"Panier ({cart.item_count()} articles)")
        if cart.is_empty:
            self.cart_index = None
            right_body.update("Le panier est vide")
            return
        if self.cart_index is not None:
            self.cart_index = min(self.cart_index, len(cart.lines) - 1)
        body = self._render_list(right_body, [format_cart_line(line) for line in cart.lines], self.cart_index, reserved=4)
        total = cart.total()
        body.append(f"\n\nSous-total  {format_price(total)}")
        body.append(f"\nTVA ({int(TAX_RATE * 100)}%)   {format_price(tax_amount(total))}")
        body.append(f"\nTotal       {format_price(grand_total(total))}", style="bold")
        right_body.update(body)

    def _refresh_products(self, left_title: Static, left_body: Static, right_title: Static, right_body: Static) -> None:
        products = self.pos.catalog.list_products()
        left_title.update(f"Produits ({len(products)})")
        if not products:
            left_body.update("(catalogue vide)")
        else:
            self.product_index = min(self.product_index, len(products) - 1)
            rows = []
            for product in products:
                row = Text(f"{product.name:<22.22} {product.category:<12.12} ")
                row.append(format_price(product.price), style="bold")
                rows.append(row)
            left_body.update(self._render_list(left_body, rows, self.product_index))

        right_title.update("Catégories")
        summary = Text()
        for idx, category in enumerate(self.pos.catalog.categories()):
            if idx > 0:
                summary.append("\n")
            count = sum(1 for p in products if p.category == category)
            summary.append(f"{category or '-'}: {count}")
        summary.append("\n\nA ajouter. D supprimer.", style="dim")
        right_body.update(summary)

    def _refresh_kitchen(self, left_title: Static, left_body: Static, right_title: Static, right_body: Static) -> None:
        active = self.pos.kitchen.active_board()
        left_title.update(f"En préparation ({len(active)}) · Entrée = prête")
        if not active:
            left_body.update("Aucune commande en attente")
        else:
            self.active_index = min(self.active_index, len(active) - 1)
            cards = Text()
            for idx, order in enumerate(active):
                if idx > 0:
                    cards.append("\n\n")
                cards.append("➤ " if idx == self.active_index else "  ")
                cards.append_text(format_order_card(order, minutes_waiting(order)))
            left_body.update(cards)

        ready = self.pos.kitchen.ready_board()
        right_title.update(f"Prêtes ({len(ready)}) · A = servie")
        if not ready:
            self.ready_index = 0
            right_body.update("Rien à servir")
            return
        self.ready_index = min(self.ready_index, len(ready) - 1)
        cards = Text()
        for idx, order in enumerate(ready):
            if idx > 0:
                cards.append("\n\n")
            cards.append("➤ " if idx == self.ready_index else "  ")
            cards.append_text(format_order_card(order))
        right_body.update(cards)

    def _refresh_dashboard(self, left_title: Static, left_body: Static, right_title: Static, right_body: Static) -> None:
        report, range_label, waiter_label = self._current_report()
        left_title.update(f"{range_label} · {waiter_label} (R période, P dates, W serveur)")

        body = Text()
        body.append(f"CA total       {format_price(report.total_revenue)}\n", style="bold")
        body.append(f"Commandes      {report.total_orders}\n")
        body.append(f"Panier moyen   {format_price(report.avg_order_value)}\n")
        body.append(f"CA / jour      {format_price(report.revenue_per_day)}\n\n")
        body.append("Évolution du CA\n", style="bold")
        if not report.daily_sales:
            body.append("-", style="dim")
        peak = max((point.value for point in report.daily_sales), default=0)
        for idx, point in enumerate(report.daily_sales):
            if idx > 0:
                body.append("\n")
            body.append_text(format_bar(point.label, point.value, peak))
        left_body.update(body)

        right_title.update("Répartition")
        breakdown = Text()
        sections = (("Par catégorie", report.category_sales), ("Par serveur", report.waiter_sales))
        for section_idx, (heading, entries) in enumerate(sections):
            if section_idx > 0:
                breakdown.append("\n\n")
            breakdown.append(f"{heading}\n", style="bold")
            if not entries:
                breakdown.append("-", style="dim")
            peak = max((entry.value for entry in entries), default=0)
            for idx, entry in enumerate(entries):
                if idx > 0:
                    breakdown.append("\n")
                breakdown.append_text(format_bar(entry.name, entry.value, peak))
        right_body.update(breakdown)

    def _refresh_status_bar(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        waiter = self.pos.session.active
        text = Text()
        text.append(f"{VIEW_TITLES[self.view]}", style="bold")
        text.append(f" · {waiter.name if waiter else 'non connecté'}")
        text.append("  F1 caisse F2 produits F3 cuisine F4 tableau · Ctrl+S encaisser · Ctrl+L déconnexion", style="dim")
        text.append(f"\n{self.system_status or 'Prêt'}")
        bar.update(text)
