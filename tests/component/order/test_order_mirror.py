"""
Order Mirror and Factory Component Tests

The JSON mirror must round-trip every field, nullable ones included.
"""

import json

import pytest
from datetime import datetime, timezone
from decimal import Decimal

from core.config import LaundryConfig
from microservices.order_service.factory import create_order_service
from microservices.order_service.models import OrderStatus, PaymentStatus
from microservices.order_service.order_store import OrderStore
from microservices.order_service.persistence import JsonOrderMirror
from microservices.order_service.protocols import OrderMirrorProtocol, OrderServiceError
from microservices.order_service.seed import demo_orders

pytestmark = [pytest.mark.component]


@pytest.fixture
def mirror(tmp_path):
    return JsonOrderMirror(tmp_path / "state" / "laundro_orders.json")


class TestJsonOrderMirror:

    def test_missing_file_loads_none(self, mirror):
        assert mirror.load() is None

    def test_round_trip_keeps_every_field(self, mirror, factory):
        picked_up = factory.make_order(
            status=OrderStatus.PICKED_UP,
            cloth_count=12,
            blanket_count=0,
            actual_pickup_time=datetime(2024, 5, 2, 9, 45, tzinfo=timezone.utc),
            total_amount=Decimal("49"),
            notes="leave at gate",
        )
        bare = factory.make_order()

        mirror.save([picked_up, bare])

        assert [o.model_dump() for o in mirror.load()] == [picked_up.model_dump(), bare.model_dump()]

    def test_nullable_fields_written_as_null(self, mirror, factory):
        mirror.save([factory.make_order()])

        record = json.loads(mirror.path.read_text())[0]

        assert record["partner_id"] is not None
        assert record["cloth_count"] is None
        assert record["ready_at_time"] is None
        assert record["actual_delivery_time"] is None
        assert "notes" in record

    def test_corrupt_file(self, mirror):
        mirror.path.parent.mkdir(parents=True)
        mirror.path.write_text("{not json")

        with pytest.raises(OrderServiceError):
            mirror.load()

    def test_attach_follows_store(self, mirror, factory):
        store = OrderStore()
        unsubscribe = mirror.attach(store)
        order = factory.make_order()

        store.insert(order)
        store.replace(order.model_copy(update={"status": OrderStatus.PICKED_UP, "cloth_count": 3,
                                               "blanket_count": 1}))

        saved = mirror.load()
        assert saved[0].status == OrderStatus.PICKED_UP
        unsubscribe()

    def test_satisfies_protocol(self, mirror):
        assert isinstance(mirror, OrderMirrorProtocol)


class TestSeed:

    def test_demo_orders(self):
        delivered, picked_up = demo_orders()

        assert delivered.status == OrderStatus.DELIVERED
        assert delivered.payment_status == PaymentStatus.COMPLETED
        assert delivered.actual_delivery_time is not None
        assert picked_up.status == OrderStatus.PICKED_UP
        assert picked_up.ready_at_time is None
        assert picked_up.partner_id == "p2"


class TestFactory:

    def test_seeds_empty_store(self):
        service = create_order_service(config=LaundryConfig(seed_demo_orders=True, order_store_path=""))

        assert [o.id for o in service.store.snapshot()] == ["o1", "o2"]

    def test_no_seed(self):
        service = create_order_service(config=LaundryConfig(seed_demo_orders=False, order_store_path=""))

        assert len(service.store) == 0

    def test_saved_state_wins_over_seed(self, tmp_path, factory):
        path = tmp_path / "orders.json"
        saved = factory.make_order()
        JsonOrderMirror(path).save([saved])

        service = create_order_service(config=LaundryConfig(order_store_path=str(path)))

        assert [o.model_dump() for o in service.store.snapshot()] == [saved.model_dump()]

    def test_writes_are_mirrored(self, tmp_path, factory):
        path = tmp_path / "orders.json"
        config = LaundryConfig(order_store_path=str(path), seed_demo_orders=False, default_partner_id=None)
        service = create_order_service(config=config)

        order = service.create_order(factory.make_create_request())

        assert [o.model_dump() for o in JsonOrderMirror(path).load()] == [order.model_dump()]

    def test_explicit_store(self, factory):
        store = OrderStore([factory.make_order()])

        service = create_order_service(config=LaundryConfig(), store=store)

        assert service.store is store
