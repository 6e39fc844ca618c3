"""Application service: Place Order use case (the order engine).

Runs the whole placement as one unit of work:

1. Validate the request and merge the cart per flower (no I/O yet).
2. Resolve the owning customer profile, creating or reactivating it
   for a self-service principal.
3. Open a pending order shell.
4. For each merged line, in cart order: reserve stock (atomic
   check-and-decrement), snapshot the price, attach the item.
5. Store the accumulated total and commit.

Any failure before the commit rolls the unit of work back on exit, so
no stock, item or profile change survives a rejected order.  Transient
database failures retry the whole placement.
"""

from __future__ import annotations

import time
from collections.abc import Callable

import structlog

from flowershop.application.dto import OrderDTO, PlaceOrderRequest, Principal
from flowershop.domain.exceptions import (
    AuthorizationError,
    DomainException,
    EntityNotFoundError,
    ProfileResolutionError,
    TransientFailure,
    ValidationError,
)
from flowershop.domain.model.cart import Cart
from flowershop.domain.model.customer import CustomerProfile
from flowershop.domain.model.order import FulfilmentDetails, Order, OrderItem
from flowershop.domain.model.value_objects import MAX_INTEGER
from flowershop.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)

CUSTOMER_ROLE = "customer"

ResolveCustomer = Callable[[UnitOfWork], tuple[CustomerProfile, str | None]]


class PlaceOrderHandler:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        max_attempts: int = 3,
        backoff_seconds: float = 0.05,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._uow_factory = uow_factory
        self._max_attempts = max(1, max_attempts)
        self._backoff_seconds = backoff_seconds
        self._sleep = sleep

    # --- Entry points ---------------------------------------------------------

    def handle_for_principal(
        self, principal: Principal, request: PlaceOrderRequest
    ) -> OrderDTO:
        """Self-service path: the order belongs to the principal's own profile."""
        log = logger.bind(user_id=principal.id)

        if principal.role != CUSTOMER_ROLE:
            log.warning("place_order_forbidden", role=principal.role)
            raise AuthorizationError("Customers only")

        cart, details = self._validate(request, log)

        if not principal.email or not principal.email.strip():
            log.warning("place_order_missing_email")
            raise ProfileResolutionError("Authenticated user is missing an email")

        return self._run(
            lambda uow: self._resolve_profile(uow, principal), cart, details, log
        )

    def handle_for_customer(
        self, customer_id: int, request: PlaceOrderRequest
    ) -> OrderDTO:
        """Staff path: the order is entered for an existing customer."""
        log = logger.bind(customer_id=customer_id)

        if isinstance(customer_id, bool) or not isinstance(customer_id, int):
            log.warning("place_order_invalid_customer")
            raise ValidationError("customerId and items are required")
        if customer_id > MAX_INTEGER:
            log.warning("place_order_invalid_customer")
            raise ValidationError("Invalid customer")

        cart, details = self._validate(request, log)
        return self._run(
            lambda uow: (self._load_customer(uow, customer_id), None), cart, details, log
        )

    # --- Validation -----------------------------------------------------------

    @staticmethod
    def _validate(
        request: PlaceOrderRequest, log: structlog.stdlib.BoundLogger
    ) -> tuple[Cart, FulfilmentDetails]:
        try:
            cart = Cart.from_lines(
                (line.flower_id, line.quantity) for line in request.items or []
            )
            details = FulfilmentDetails.create(
                contact_phone=request.contact_phone,
                mode=request.fulfilment_mode,
                delivery_address=request.delivery_address,
                delivery_date=request.delivery_date,
                gift_message=request.gift_message,
                notes=request.notes,
            )
        except ValidationError as exc:
            log.warning("place_order_invalid_request", error=str(exc))
            raise
        return cart, details

    # --- Transaction ----------------------------------------------------------

    def _run(
        self,
        resolve_customer: ResolveCustomer,
        cart: Cart,
        details: FulfilmentDetails,
        log: structlog.stdlib.BoundLogger,
    ) -> OrderDTO:
        log = log.bind(lines=len(cart), units=cart.unit_count)

        for attempt in range(1, self._max_attempts + 1):
            try:
                order_id = self._place(resolve_customer, cart, details, log)
                break
            except TransientFailure:
                if attempt == self._max_attempts:
                    log.error("place_order_gave_up", attempts=attempt, exc_info=True)
                    raise
                log.warning("place_order_retrying", attempt=attempt)
                self._sleep(self._backoff_seconds * 2 ** (attempt - 1))
            except DomainException as exc:
                log.warning(
                    "place_order_rejected",
                    error=str(exc),
                    error_type=type(exc).__name__,
                    flower_id=getattr(exc, "flower_id", None),
                    available=getattr(exc, "available", None),
                    requested=getattr(exc, "requested", None),
                )
                raise
            except Exception:
                log.exception("place_order_failed")
                raise

        with self._uow_factory() as uow:
            placed = uow.orders.get_by_id(order_id, with_items=True)
        if placed is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return OrderDTO.from_order(placed)

    def _place(
        self,
        resolve_customer: ResolveCustomer,
        cart: Cart,
        details: FulfilmentDetails,
        log: structlog.stdlib.BoundLogger,
    ) -> int:
        with self._uow_factory() as uow:
            customer, profile_event = resolve_customer(uow)
            order = uow.orders.create(Order.open(customer.id, details))

            for flower_id, quantity in cart:
                flower = uow.flowers.reserve(flower_id, quantity.value)
                item = OrderItem(
                    flower_id=flower_id,
                    quantity=quantity,
                    unit_price_at_sale=flower.price,
                    flower_name=flower.name,
                )
                order.add_item(item)
                uow.orders.attach_item(order.id, item)

            uow.orders.finalize_total(order.id, order.total)
            uow.commit()

        if profile_event is not None:
            log.info(profile_event, customer_id=customer.id)
        log.info(
            "order_placed",
            order_id=order.id,
            customer_id=customer.id,
            total=str(order.total.amount),
        )
        return order.id

    # --- Customer resolution --------------------------------------------------

    @staticmethod
    def _resolve_profile(
        uow: UnitOfWork, principal: Principal
    ) -> tuple[CustomerProfile, str | None]:
        """Find, create or reactivate the principal's CRM profile."""
        email = principal.email.strip()
        defaults = CustomerProfile.create(email=email, name=principal.name)
        profile, created = uow.customers.find_or_create_by_email(email, defaults)
        if created:
            return profile, "customer_profile_created"
        if not profile.active:
            uow.customers.reactivate(profile, fallback_name=principal.name)
            return profile, "customer_profile_reactivated"
        return profile, None

    @staticmethod
    def _load_customer(uow: UnitOfWork, customer_id: int) -> CustomerProfile:
        customer = uow.customers.get_by_id(customer_id)
        if customer is None:
            raise ValidationError("Invalid customer")
        return customer
