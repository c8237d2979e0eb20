from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from stockdesk.app.application.reactive import Signal
from stockdesk.app.infrastructure.errors.error_mapper import ErrorMapper
from stockdesk.app.infrastructure.scheduler import Cancelable
from stockdesk.app.ui.components.mutation_feedback import FlashMessages
from stockdesk.app.ui.components.permission_gate import GateResult
from stockdesk.sdk.exceptions import ApiError
from stockdesk.sdk.models import Product, ProductCreate, ProductUpdate, TransactionType, User, UserRole
from stockdesk.sdk.validation import ClientValidationError

F = TypeVar("F")
E = TypeVar("E")


class EditorMode(str, Enum):
    CLOSED = "closed"
    CREATING = "creating"
    EDITING = "editing"


@dataclass
class ProductForm:
    sku: str = ""
    name: str = ""
    category: str = ""
    supplier: str = ""
    unit_price: float = 0.0
    min_stock_threshold: int = 0

    @classmethod
    def from_product(cls, product: Product) -> "ProductForm":
        return cls(
            sku=product.sku,
            name=product.name,
            category=product.category,
            supplier=product.supplier,
            unit_price=product.unit_price,
            min_stock_threshold=product.min_stock_threshold,
        )

    def to_create(self) -> ProductCreate:
        return ProductCreate(
            sku=self.sku.strip(),
            name=self.name.strip(),
            category=self.category,
            supplier=self.supplier.strip(),
            unit_price=self.unit_price,
            min_stock_threshold=self.min_stock_threshold,
        )

    def to_update(self) -> ProductUpdate:
        return ProductUpdate(
            sku=self.sku.strip(),
            name=self.name.strip(),
            category=self.category,
            supplier=self.supplier.strip(),
            unit_price=self.unit_price,
            min_stock_threshold=self.min_stock_threshold,
        )


@dataclass
class UserForm:
    name: str = ""
    email: str = ""
    password: str = ""
    role: UserRole = UserRole.USER

    @classmethod
    def from_user(cls, user: User) -> "UserForm":
        # The password field always starts blank on edit.
        return cls(name=user.name, email=user.email, password="", role=user.role)


@dataclass
class TransactionForm:
    product_id: str = ""
    type: TransactionType = TransactionType.PURCHASE
    quantity: int = 0
    notes: str = ""


@dataclass
class SaveOutcome:
    ok: bool
    message: str
    result: Any = None


@dataclass
class EditorText:
    created: str
    updated: str
    create_failed: str
    update_failed: str


class FormEditor(Generic[F, E]):
    """Create/edit buffer for one entity type.

    ``save`` runs the owning store's mutation, which performs the pre-flight
    checks. Failures leave the editor open with an error message; success
    flashes a message and closes the editor when the message clears.
    """

    def __init__(
        self,
        *,
        defaults: Callable[[], F],
        from_entity: Callable[[E], F],
        create: Callable[[F], Any],
        update: Callable[[E, F], Any],
        messages: FlashMessages,
        text: EditorText,
        gate: Callable[[str], GateResult] | None = None,
    ) -> None:
        self.defaults = defaults
        self.from_entity = from_entity
        self._create = create
        self._update = update
        self.messages = messages
        self.text = text
        self.gate = gate
        self.buffer: F | None = None
        self.editing: E | None = None
        self.mode: Signal[EditorMode] = Signal(EditorMode.CLOSED)
        self._pending_close: Cancelable | None = None

    @property
    def is_open(self) -> bool:
        return self.mode.value is not EditorMode.CLOSED

    @property
    def is_creating(self) -> bool:
        return self.mode.value is EditorMode.CREATING

    def start_create(self) -> bool:
        if not self._allowed("add"):
            return False
        self._forget_close()
        self.buffer = self.defaults()
        self.editing = None
        self.messages.clear()
        self.mode.set(EditorMode.CREATING)
        return True

    def start_edit(self, entity: E) -> bool:
        if not self._allowed("edit"):
            return False
        self._forget_close()
        self.buffer = self.from_entity(entity)
        self.editing = entity
        self.messages.clear()
        self.mode.set(EditorMode.EDITING)
        return True

    def update_buffer(self, **changes: Any) -> None:
        if self.buffer is None:
            raise RuntimeError("Editor is not open")
        self.buffer = replace(self.buffer, **changes)

    def cancel(self) -> None:
        self._forget_close()
        self._close()
        self.messages.clear()

    def save(self) -> SaveOutcome:
        if self.buffer is None:
            return SaveOutcome(False, "")
        creating = self.is_creating
        fallback = self.text.create_failed if creating else self.text.update_failed
        try:
            if creating:
                result = self._create(self.buffer)
            else:
                result = self._update(self.editing, self.buffer)
        except ClientValidationError as error:
            self.messages.show_error(error.message)
            return SaveOutcome(False, error.message)
        except ApiError as error:
            message = ErrorMapper.to_message(error, fallback)
            self.messages.show_error(message)
            return SaveOutcome(False, message)
        message = self.text.created if creating else self.text.updated
        self._forget_close()
        self._pending_close = self.messages.flash_success(message, on_clear=self._close)
        return SaveOutcome(True, message, result)

    def _allowed(self, verb: str) -> bool:
        if self.gate is None:
            return True
        decision = self.gate(verb)
        if not decision.allowed:
            self.messages.show_error(decision.reason)
        return decision.allowed

    def _forget_close(self) -> None:
        # A close left over from an earlier save must not shut a reopened editor.
        self.messages.cancel(self._pending_close)
        self._pending_close = None

    def _close(self) -> None:
        self._pending_close = None
        self.buffer = None
        self.editing = None
        self.mode.set(EditorMode.CLOSED)
