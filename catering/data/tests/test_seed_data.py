import pytest

from catering.config import set_config_for_test
from catering.data.backends.csv_backend import CsvRecordStore
from catering.data.seed_data import main
from catering.pricing.calculator import compute_totals


@pytest.fixture(autouse=True)
def quiet_config():
    set_config_for_test(log_level="WARNING")


def test_seeded_orders_are_consistently_priced(tmp_path):
    assert main(["--output-dir", str(tmp_path), "--days", "3", "--orders-per-day", "4",
                 "--start-date", "2024-05-01", "--seed", "7"]) == 0

    store = CsvRecordStore(data_dir=tmp_path)
    orders = store.get_orders()
    assert orders
    assert store.get_customers()
    for order in orders:
        totals = compute_totals(order.items, order.discount_type, order.discount_value)
        assert (order.subtotal_amount, order.discount_amount, order.total_amount) == (
            totals.subtotal, totals.discount_amount, totals.total,
        )


def test_no_overwrite_refuses_existing_files(tmp_path):
    args = ["--output-dir", str(tmp_path), "--days", "1"]
    assert main(args) == 0
    assert main(args + ["--no-overwrite"]) == 2
