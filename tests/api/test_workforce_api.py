def _staff(user_id, workload, maximum=10, **extra):
    return {
        "user_id": user_id,
        "current_workload": workload,
        "max_concurrent_assignments": maximum,
        **extra,
    }


def test_rank_orders_available_first(api_client):
    response = api_client.post(
        "/workforce/rank",
        json={
            "staff": [
                _staff("away", 1, availability_status="off_duty"),
                _staff("near", 4, last_known_location={"lat": 12.98, "lng": 77.60}),
                _staff("far", 4, last_known_location={"lat": 13.5, "lng": 78.0}),
                _staff("busy", 12),
            ],
            "target_location": {"lat": 12.9716, "lng": 77.5946},
        },
    )

    assert response.status_code == 200
    ranked = response.json()["staff"]
    assert [r["user_id"] for r in ranked] == ["near", "far", "busy", "away"]
    assert [r["recommendation_rank"] for r in ranked] == [1, 2, 3, 4]
    assert ranked[0]["distance_km"] < ranked[1]["distance_km"]
    assert ranked[2]["capacity_percentage"] == 120.0
    assert ranked[2]["display_capacity_percentage"] == 100
    assert ranked[2]["distance_km"] is None


def test_rank_with_jurisdiction(api_client):
    response = api_client.post(
        "/workforce/rank",
        json={
            "staff": [
                _staff("s1", 1, ward_id="W1", department_id="D1"),
                _staff("s2", 0, ward_id="W2", department_id="D2"),
                _staff("s3", 2, ward_id="W3", department_id="D1"),
            ],
            "jurisdiction": {"assigned_wards": ["W1"], "assigned_departments": ["D1"],
                             "supervisor_level": "combined"},
        },
    )

    assert [r["user_id"] for r in response.json()["staff"]] == ["s1", "s3"]


def test_rebalance(api_client):
    response = api_client.post(
        "/workforce/rebalance",
        json={
            "staff": [_staff("A", 9), _staff("B", 2)],
            "assignments": [
                {"assignment_id": "c1", "staff_id": "A"},
                {"assignment_id": "t1", "staff_id": "A", "item_type": "task"},
                {"assignment_id": "c2", "staff_id": "A"},
            ],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_moves"] == 2
    assert data["moves"] == [
        {"assignment_id": "c1", "item_type": "complaint", "from_staff_id": "A", "to_staff_id": "B"},
        {"assignment_id": "t1", "item_type": "task", "from_staff_id": "A", "to_staff_id": "B"},
    ]


def test_rebalance_without_targets(api_client):
    response = api_client.post(
        "/workforce/rebalance",
        json={
            "staff": [_staff("A", 9), _staff("B", 7)],
            "assignments": [{"assignment_id": "c1", "staff_id": "A"}],
        },
    )

    assert response.json() == {"moves": [], "total_moves": 0}


def test_summary(api_client):
    response = api_client.post(
        "/workforce/summary",
        json={"staff": [_staff("A", 9), _staff("B", 6), _staff("C", 2)]},
    )

    data = response.json()
    assert data["total_staff"] == 3
    assert data["overloaded"] == 1
    assert data["balanced"] == 1
    assert data["underutilized"] == 1


def test_negative_workload_rejected(api_client):
    response = api_client.post("/workforce/summary", json={"staff": [_staff("A", -1)]})
    assert response.status_code == 422
