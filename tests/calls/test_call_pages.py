import requests


def _active_call(client):
    with client.session_transaction() as s:
        return s.get("active_call")


def test_make_call_stores_active_call(client, fake_session, flashes):
    fake_session.respond("POST", "/api/call-manager/make-call",
                         {"call": {"id": "c1", "phoneNumber": "5551234567", "status": "connecting"}})

    resp = client.post("/calls/make", data={"phone_number": "5551234567"})

    assert resp.status_code == 302
    assert _active_call(client)["call_id"] == "c1"
    assert fake_session.calls_to("POST", "/api/call-manager/make-call")[0]["json"] == {"phoneNumber": "5551234567"}
    assert ("success", "Call initiated. Calling 5551234567...") in flashes()


def test_failed_make_call_leaves_no_active_call(client, fake_session, flashes):
    fake_session.respond("POST", "/api/call-manager/make-call", {"message": "provider down"}, status=500)

    client.post("/calls/make", data={"phone_number": "5551234567"})

    assert _active_call(client) is None
    assert ("danger", "Call failed. Unable to initiate call. Please try again.") in flashes()


def test_unreachable_backend_stores_no_call(client, fake_session, flashes):
    fake_session.fail("POST", "/api/call-manager/make-call", requests.ConnectionError("down"))

    client.post("/calls/make", data={"phone_number": "5551234567"})

    assert _active_call(client) is None
    assert ("danger", "Call failed. Unable to initiate call. Please try again.") in flashes()


def test_blank_number_is_not_sent(client, fake_session, flashes):
    client.post("/calls/make", data={"phone_number": ""})

    assert not fake_session.calls
    assert ("danger", "Phone number required. Please enter a phone number to call.") in flashes()


def test_end_call_clears_session_and_refetches_logs(client, fake_session):
    fake_session.respond("POST", "/api/call-manager/make-call",
                         {"call": {"id": "c1", "phoneNumber": "5551234567", "status": "active"}})
    fake_session.respond("POST", "/api/call-manager/end-call/c1", {"ok": True})
    fake_session.respond("GET", "/api/call-manager/logs", [])
    fake_session.respond("GET", "/api/call-manager/contacts", [])
    fake_session.respond("GET", "/api/call-manager/active-calls", [])

    client.get("/calls")
    client.post("/calls/make", data={"phone_number": "5551234567"})
    client.post("/calls/end")
    client.get("/calls")

    assert _active_call(client) is None
    assert len(fake_session.calls_to("GET", "/api/call-manager/logs")) == 2


def test_page_always_polls_active_calls(client, fake_session):
    fake_session.respond("GET", "/api/call-manager/logs", [])
    fake_session.respond("GET", "/api/call-manager/contacts", [])
    fake_session.respond("GET", "/api/call-manager/active-calls", [])

    assert '<meta http-equiv="refresh" content="2">' in client.get("/calls").get_data(as_text=True)

    with client.session_transaction() as s:
        s["active_call"] = {"call_id": "c1", "phone_number": "5551234567", "status": "active", "start_time": None}

    assert '<meta http-equiv="refresh" content="2">' in client.get("/calls").get_data(as_text=True)


def test_make_call_while_a_call_is_active_keeps_it(client, fake_session, flashes):
    fake_session.respond("POST", "/api/call-manager/make-call", {"message": "provider down"}, status=500)
    existing = {"call_id": "c1", "phone_number": "5551234567", "status": "active", "start_time": None}
    with client.session_transaction() as s:
        s["active_call"] = existing

    client.post("/calls/make", data={"phone_number": "5559876543"})

    assert _active_call(client)["call_id"] == "c1"
    assert not fake_session.calls_to("POST", "/api/call-manager/make-call")
    assert ("warning", "A call is already in progress") in flashes()
