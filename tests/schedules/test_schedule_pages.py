def test_month_params_are_sent_and_create_invalidates(client, fake_session, flashes):
    fake_session.respond("GET", "/api/schedules", [
        {"id": 1, "title": "Install AC", "startDate": "2025-01-15", "startTime": "09:00", "endTime": "11:00",
         "status": "scheduled", "priority": "high", "userId": 3},
    ])
    fake_session.respond("POST", "/api/schedules", {"id": 2})

    html = client.get("/schedules?date=2025-01-15&view=1month").get_data(as_text=True)
    assert "Install AC" in html
    assert [c["params"] for c in fake_session.calls_to("GET", "/api/schedules")] == [
        {"month": "12", "year": "2024"},
        {"month": "01", "year": "2025"},
        {"month": "02", "year": "2025"},
    ]

    resp = client.post("/schedules/new", data={
        "title": "Tune-up", "start_date": "2025-01-20", "start_time": "10:00", "end_time": "12:00",
        "user_id": "3", "return_date": "2025-01-15", "return_view": "1month",
    })
    assert resp.status_code == 302
    assert "date=2025-01-15" in resp.headers["Location"]
    assert ("success", "Schedule created successfully") in flashes()

    client.get("/schedules?date=2025-01-15&view=1month")
    assert len(fake_session.calls_to("GET", "/api/schedules")) == 6


def test_invalid_schedule_is_not_posted(client, fake_session, flashes):
    client.post("/schedules/new", data={"title": "", "start_date": "2025-01-20"})

    assert ("danger", "Title is required") in flashes()
    assert not fake_session.calls_to("POST", "/api/schedules")


def test_row_without_start_date_is_dropped(client, fake_session):
    fake_session.respond("GET", "/api/schedules", [
        {"id": 1, "title": "Undated job", "startTime": "09:00", "endTime": "10:00", "userId": 3},
        {"id": 2, "title": "Install AC", "startDate": "2025-01-15", "startTime": "09:00", "endTime": "11:00",
         "userId": 3},
    ])

    resp = client.get("/schedules?date=2025-01-15&view=1month")

    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "Install AC" in html
    assert "Undated job" not in html
