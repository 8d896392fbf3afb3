"""Tests for the receipt HTTP routes."""

import uuid

import pytest


def submit(client, body: dict):
    return client.post("/receipt/process", json=body)


class TestProcessReceipt:
    """Tests for POST /receipt/process."""

    def test_returns_generated_id(self, client, store, target_receipt) -> None:
        response = submit(client, target_receipt)

        assert response.status_code == 200
        receipt_id = response.json()["id"]
        assert uuid.UUID(receipt_id)
        assert len(store) == 1

    def test_each_submission_gets_new_id(self, client, target_receipt) -> None:
        first = submit(client, target_receipt).json()["id"]
        second = submit(client, target_receipt).json()["id"]

        assert first != second

    def test_client_id_and_points_ignored(self, client, store, target_receipt) -> None:
        body = dict(target_receipt, id="mine", points="999")

        receipt_id = submit(client, body).json()["id"]

        assert receipt_id != "mine"
        assert store.find_by_id(receipt_id).points == "20"

    def test_single_digit_hour_accepted(self, client, target_receipt) -> None:
        body = dict(target_receipt, purchaseTime="9:05")

        assert submit(client, body).status_code == 200

    def test_description_with_spaces_rejected(self, client, target_receipt) -> None:
        """Descriptions must not contain whitespace."""
        body = dict(target_receipt)
        body["items"] = [{"shortDescription": "Mountain Dew 12PK", "price": "6.49"}]

        response = submit(client, body)

        assert response.status_code == 400
        assert "shortDescription" in response.json()["detail"]

    def test_missing_items_rejected(self, client, store, target_receipt) -> None:
        body = {k: v for k, v in target_receipt.items() if k != "items"}

        response = submit(client, body)

        assert response.status_code == 400
        assert "items" in response.json()["detail"]
        assert len(store) == 0

    def test_empty_items_rejected(self, client, store, target_receipt) -> None:
        response = submit(client, dict(target_receipt, items=[]))

        assert response.status_code == 400
        assert len(store) == 0

    @pytest.mark.parametrize(
        "field, value",
        [
            ("retailer", ""),
            ("purchaseDate", "2022-13-01"),
            ("purchaseDate", "2022-01-32"),
            ("purchaseDate", "01-01-2022"),
            ("purchaseTime", "24:00"),
            ("purchaseTime", "13:60"),
            ("total", "35.3"),
            ("total", "-35.35"),
            ("total", 35.35),
            ("total", "٣٥.٣٥"),
            ("purchaseDate", "٢٠٢٢-01-01"),
        ],
    )
    def test_malformed_field_rejected(self, client, target_receipt, field, value) -> None:
        response = submit(client, dict(target_receipt, **{field: value}))

        assert response.status_code == 400
        assert field in response.json()["detail"]

    def test_snake_case_keys_rejected(self, client, store, target_receipt) -> None:
        """Only the camelCase wire names are accepted."""
        body = {k: v for k, v in target_receipt.items() if k != "purchaseDate"}
        body["purchase_date"] = target_receipt["purchaseDate"]

        response = submit(client, body)

        assert response.status_code == 400
        assert "purchaseDate" in response.json()["detail"]
        assert len(store) == 0

    def test_total_wider_than_decimal_precision(self, client, store, target_receipt) -> None:
        body = dict(target_receipt, total="10000000000000000000000000000.00")

        response = submit(client, body)

        assert response.status_code == 200
        assert store.find_by_id(response.json()["id"]).points == "95"

    def test_bad_item_price_rejected(self, client, target_receipt) -> None:
        body = dict(target_receipt)
        body["items"] = [{"shortDescription": "Pepsi", "price": "1.2"}]

        assert submit(client, body).status_code == 400

    def test_invalid_json_rejected(self, client) -> None:
        response = client.post(
            "/receipt/process",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "detail" in response.json()


class TestGetPoints:
    """Tests for GET /receipt/{id}/points."""

    def test_points_for_submitted_receipt(self, client, target_receipt) -> None:
        receipt_id = submit(client, target_receipt).json()["id"]

        response = client.get(f"/receipt/{receipt_id}/points")

        assert response.status_code == 200
        assert response.json() == {"points": "20"}

    @pytest.mark.parametrize("purchase_time, expected", [("14:00", "20"), ("14:01", "30")])
    def test_afternoon_boundary(self, client, store, target_receipt, purchase_time, expected) -> None:
        """A purchase at 14:00 misses the afternoon bonus, 14:01 earns it."""
        receipt_id = submit(client, dict(target_receipt, purchaseTime=purchase_time)).json()["id"]

        assert store.find_by_id(receipt_id).points == expected
        assert client.get(f"/receipt/{receipt_id}/points").json() == {"points": expected}

    def test_unknown_id_not_found(self, client) -> None:
        response = client.get(f"/receipt/{uuid.uuid4()}/points")

        assert response.status_code == 404
        assert response.json() == {"detail": "No receipt found for that id"}
