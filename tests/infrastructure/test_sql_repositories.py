"""Tests for the SQLAlchemy repositories and unit of work (in-memory SQLite)."""

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from storefront.domain.exceptions import AlreadyReviewedError, ProductInUseError
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.review import Review
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import PageRequest, Rating, RatingSummary
from storefront.domain.service.cart_snapshot_reader import CartSnapshotReader
from storefront.infrastructure.persistence._integrity import is_unique_violation
from storefront.infrastructure.persistence.sql_cart_repository import SqlCartRepository


class TestUnitOfWork:

    def test_commit_persists(self, seeded):
        with seeded() as uow:
            uow.users.save(User(id="u3", name="Carol", email="carol@example.com"))
            uow.commit()

        with seeded() as uow:
            assert uow.users.get_by_id("u3").name == "Carol"

    def test_leaving_without_commit_rolls_back(self, seeded):
        with seeded() as uow:
            uow.users.save(User(id="u3", name="Carol", email="carol@example.com"))

        with seeded() as uow:
            assert uow.users.get_by_id("u3") is None

    def test_exception_rolls_back(self, seeded):
        with pytest.raises(RuntimeError):
            with seeded() as uow:
                assert uow.products.decrement_stock("A", 1)
                raise RuntimeError("boom")

        with seeded() as uow:
            assert uow.products.get_by_id("A").stock == 2


class TestProductRepository:

    def test_round_trip(self, seeded):
        with seeded() as uow:
            widget = uow.products.get_by_id("A")
        assert widget.name == "Widget"
        assert str(widget.price) == "$10.00"
        assert widget.rating == Decimal("0.00")

    def test_lookup_by_name_is_case_insensitive(self, seeded):
        with seeded() as uow:
            assert uow.products.get_by_name("WIDGET").id == "A"

    def test_list_all_ordered_by_name(self, seeded):
        with seeded() as uow:
            assert [p.name for p in uow.products.list_all()] == ["Gadget", "Gizmo", "Widget"]

    def test_next_id(self, seeded):
        with seeded() as uow:
            assert uow.products.next_id() == "1"

    def test_next_id_counts_up_across_units_of_work(self, seeded):
        with seeded() as uow:
            assert [uow.products.next_id(), uow.products.next_id()] == ["1", "2"]
            uow.commit()

        with seeded() as uow:
            assert uow.products.next_id() == "3"

    def test_list_one_page(self, seeded):
        with seeded() as uow:
            page = uow.products.list_all(PageRequest(page=2, limit=2))
        assert [p.name for p in page] == ["Widget"]

    def test_list_top_rated(self, seeded):
        with seeded() as uow:
            uow.products.update_rating("A", RatingSummary(Decimal("4.00"), 3))
            uow.products.update_rating("B", RatingSummary(Decimal("4.50"), 2))
            uow.products.update_rating("C", RatingSummary(Decimal("3.99"), 9))
            uow.commit()

        with seeded() as uow:
            top = uow.products.list_top_rated(Decimal("4"), limit=5)
            assert [p.id for p in top] == ["B", "A"]
            assert [p.id for p in uow.products.list_top_rated(Decimal("4"), limit=1)] == ["B"]

    def test_conditional_decrement(self, seeded):
        with seeded() as uow:
            assert uow.products.decrement_stock("A", 2) is True
            assert uow.products.decrement_stock("A", 1) is False
            assert uow.products.get_by_id("A").stock == 0
            uow.commit()

    def test_decrement_of_missing_product(self, seeded):
        with seeded() as uow:
            assert uow.products.decrement_stock("ZZZ", 1) is False

    def test_update_rating(self, seeded):
        with seeded() as uow:
            uow.products.update_rating("A", RatingSummary(Decimal("4.67"), 3))
            uow.commit()
        with seeded() as uow:
            widget = uow.products.get_by_id("A")
        assert widget.rating == Decimal("4.67")
        assert widget.review_count == 3

    def test_delete_removes_cart_lines_and_reviews(self, seeded):
        with seeded() as uow:
            cart = uow.carts.get_or_create("u1")
            cart.add("A", 1)
            uow.carts.save(cart)
            uow.reviews.save(Review(id=None, user_id="u1", product_id="A", rating=Rating(4)))
            uow.products.delete("A")
            uow.commit()

        with seeded() as uow:
            assert uow.products.get_by_id("A") is None
            assert uow.carts.get_or_create("u1").is_empty
            assert uow.reviews.ratings_for_product("A") == []

    def test_delete_blocked_by_order_history(self, seeded):
        with seeded() as uow:
            lines = _lines(uow, "u1", {"A": 1})
            uow.orders.save(Order.place("u1", lines))
            uow.commit()

        with pytest.raises(ProductInUseError):
            with seeded() as uow:
                uow.products.delete("A")


def _lines(uow, buyer_id, quantities):
    cart = uow.carts.get_or_create(buyer_id)
    for product_id, quantity in quantities.items():
        cart.add(product_id, quantity)
    uow.carts.save(cart)
    return CartSnapshotReader(uow.carts, uow.products).snapshot(buyer_id)


class TestCartRepository:

    def test_get_or_create_is_stable(self, seeded):
        with seeded() as uow:
            first = uow.carts.get_or_create("u1")
            second = uow.carts.get_or_create("u1")
            uow.commit()
        assert first.id == second.id

    def test_lines_round_trip_in_order(self, seeded):
        with seeded() as uow:
            cart = uow.carts.get_or_create("u1")
            cart.add("B", 1)
            cart.add("A", 2)
            uow.carts.save(cart)
            uow.commit()

        with seeded() as uow:
            cart = uow.carts.get_or_create("u1")
        assert [(i.product_id, i.quantity.value) for i in cart.items] == [("B", 1), ("A", 2)]

    def test_save_syncs_changes_and_removals(self, seeded):
        with seeded() as uow:
            cart = uow.carts.get_or_create("u1")
            cart.add("A", 1)
            cart.add("B", 1)
            uow.carts.save(cart)
            cart.change_quantity("A", 2)
            cart.remove("B")
            uow.carts.save(cart)
            uow.commit()

        with seeded() as uow:
            cart = uow.carts.get_or_create("u1")
        assert [(i.product_id, i.quantity.value) for i in cart.items] == [("A", 2)]

    def test_get_or_create_after_a_concurrent_first_access(self, seeded, session_factory):
        with seeded() as uow:
            existing = uow.carts.get_or_create("u1")
            uow.commit()

        with session_factory() as session:
            cart = _StaleReadCartRepository(session).get_or_create("u1")

        assert cart.id == existing.id

    def test_get_or_create_for_unknown_buyer(self, seeded, session_factory):
        with session_factory() as session:
            with pytest.raises(IntegrityError):
                SqlCartRepository(session).get_or_create("ghost")


class TestOrderRepository:

    def test_save_assigns_id_and_freezes_items(self, seeded):
        with seeded() as uow:
            order = Order.place("u1", _lines(uow, "u1", {"A": 1, "B": 1}), notes="gift")
            uow.orders.save(order)
            uow.commit()
        assert order.id is not None

        with seeded() as uow:
            widget = uow.products.get_by_id("A")
            widget.update_price(widget.price * 3)
            uow.products.save(widget)
            uow.commit()

        with seeded() as uow:
            saved = uow.orders.get_by_id(order.id)
        assert str(saved.total) == "$15.00"
        assert [(i.product_name, str(i.unit_price)) for i in saved.items] == [
            ("Widget", "$10.00"),
            ("Gadget", "$5.00"),
        ]
        assert saved.notes == "gift"
        assert saved.created_at.tzinfo is not None

    def test_status_update(self, seeded):
        with seeded() as uow:
            order = Order.place("u1", _lines(uow, "u1", {"A": 1}))
            uow.orders.save(order)
            order.transition_to(OrderStatus.SHIPPED)
            uow.orders.save(order)
            uow.commit()

        with seeded() as uow:
            assert uow.orders.get_by_id(order.id).status == OrderStatus.SHIPPED

    def test_list_for_buyer_and_references(self, seeded):
        with seeded() as uow:
            uow.orders.save(Order.place("u1", _lines(uow, "u1", {"B": 1})))
            uow.commit()

        with seeded() as uow:
            assert len(uow.orders.list_for_buyer("u1")) == 1
            assert uow.orders.list_for_buyer("u2") == []
            assert uow.orders.references_product("B")
            assert not uow.orders.references_product("A")

    def test_list_all_newest_first(self, seeded):
        with seeded() as uow:
            first = Order.place("u1", _lines(uow, "u1", {"A": 1}))
            uow.orders.save(first)
            second = Order.place("u2", _lines(uow, "u2", {"B": 1}))
            uow.orders.save(second)
            uow.commit()

        with seeded() as uow:
            assert [o.id for o in uow.orders.list_all()] == [second.id, first.id]
            assert [o.id for o in uow.orders.list_all(PageRequest(2, 1))] == [first.id]


class TestReviewRepository:

    def test_one_review_per_user_and_product(self, seeded):
        with seeded() as uow:
            uow.reviews.save(Review(id=None, user_id="u1", product_id="A", rating=Rating(4)))
            with pytest.raises(AlreadyReviewedError):
                uow.reviews.save(
                    Review(id=None, user_id="u1", product_id="A", rating=Rating(2))
                )

    def test_ratings_and_delete(self, seeded):
        with seeded() as uow:
            first = Review(id=None, user_id="u1", product_id="A", rating=Rating(4))
            uow.reviews.save(first)
            uow.reviews.save(Review(id=None, user_id="u2", product_id="A", rating=Rating(2)))
            assert sorted(uow.reviews.ratings_for_product("A")) == [2, 4]

            uow.reviews.delete(first.id)
            assert uow.reviews.ratings_for_product("A") == [2]
            assert uow.reviews.get_by_user_and_product("u1", "A") is None

    def test_list_for_product_by_user_and_page(self, seeded):
        with seeded() as uow:
            uow.reviews.save(Review(id=None, user_id="u1", product_id="A", rating=Rating(4)))
            uow.reviews.save(Review(id=None, user_id="u2", product_id="A", rating=Rating(2)))

            by_bob = uow.reviews.list_for_product("A", user_id="u2")
            assert [r.rating.value for r in by_bob] == [2]
            assert len(uow.reviews.list_for_product("A", page=PageRequest(1, 1))) == 1


class TestUserRepository:

    def test_email_lookup_is_case_insensitive(self, seeded):
        with seeded() as uow:
            assert uow.users.get_by_email("ALICE@example.com").id == "u1"

    def test_next_id_is_unique(self, seeded):
        with seeded() as uow:
            assert uow.users.next_id() != uow.users.next_id()


class TestUniqueViolationMatching:

    REVIEW_COLUMNS = ("reviews.user_id", "reviews.product_id")

    def _error(self, message: str) -> IntegrityError:
        return IntegrityError("INSERT INTO reviews ...", {}, Exception(message))

    def test_sqlite_column_list(self):
        exc = self._error("UNIQUE constraint failed: reviews.user_id, reviews.product_id")
        assert is_unique_violation(exc, "uq_reviews_user_product", self.REVIEW_COLUMNS)

    def test_named_constraint(self):
        exc = self._error(
            'duplicate key value violates unique constraint "uq_reviews_user_product"'
        )
        assert is_unique_violation(exc, "uq_reviews_user_product", self.REVIEW_COLUMNS)

    def test_other_unique_constraint_is_not_matched(self):
        exc = self._error("UNIQUE constraint failed: users.email")
        assert not is_unique_violation(exc, "uq_reviews_user_product", self.REVIEW_COLUMNS)


class _StaleReadCartRepository(SqlCartRepository):
    """Misses the cart on its first lookup, as a request racing another would."""

    def __init__(self, session) -> None:
        super().__init__(session)
        self._missed = False

    def _find(self, buyer_id: str):
        if not self._missed:
            self._missed = True
            return None
        return super()._find(buyer_id)
