from datetime import date

import pytest

from catering.config import set_config_for_test
from catering.data.backends.csv_backend import CsvRecordStore
from catering.data.models import Order, OrderItem
from catering.export import main
from catering.orders.service import OrderService


@pytest.fixture(autouse=True)
def configured(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    set_config_for_test(log_level="WARNING", data_dir=str(data_dir), export_dir=str(tmp_path / "exports"))
    service = OrderService(CsvRecordStore(data_dir=data_dir))
    first = service.create_order(Order(
        delivery_date=date(2024, 5, 1),
        items=[OrderItem(item_name="Samosa", size_type="half_tray", quantity=2, unit_price="32.00")],
    ))
    service.create_order(Order(
        delivery_date=date(2024, 5, 1),
        items=[OrderItem(item_name="Samosa", size_type="half_tray", quantity=1, unit_price="32.00")],
    ))
    service.change_status(first.order_number, "paid")


def test_export_preparation(tmp_path, capsys):
    assert main(["preparation", "--date", "2024-05-01"]) == 0
    path = tmp_path / "exports" / "preparation-list-2024-05-01.txt"
    assert capsys.readouterr().out.strip() == str(path)
    assert "Samosa (Half Tray): 3" in path.read_text(encoding="utf-8")


def test_export_preparation_with_status_filter(tmp_path):
    assert main(["preparation", "--date", "2024-05-01", "--status", "received"]) == 0
    text = (tmp_path / "exports" / "preparation-list-2024-05-01.txt").read_text(encoding="utf-8")
    assert "Samosa (Half Tray): 1" in text


def test_export_revenue(tmp_path, capsys):
    assert main(["revenue", "--start", "2024-05-01", "--end", "2024-05-02", "--output-dir", str(tmp_path / "out")]) == 0
    path = capsys.readouterr().out.strip()
    lines = open(path, encoding="utf-8").read().splitlines()
    assert lines[1] == "2024-05-01,64.00,1,64.00,64.00"
    assert lines[2] == "2024-05-02,0.00,0,0.00,32.00"


def test_store_errors_exit_non_zero(tmp_path):
    set_config_for_test(log_level="WARNING", data_dir=str(tmp_path / "missing"))
    assert main(["preparation", "--date", "2024-05-01"]) == 1
