PROMOTION = {
    "id": 5,
    "organizationId": 1,
    "name": "Spring",
    "status": "active",
    "discountType": "percentage",
    "discountValue": "20.00",
    "currentRedemptions": 0,
    "couponCodes": [
        {"id": 9, "promotionId": 5, "code": "SPRING20", "currentRedemptions": 0, "isActive": True},
    ],
}


def test_toggle_code_patches_once_and_refetches_promotion(client, fake_session):
    fake_session.respond("GET", "/api/promotions/5", PROMOTION)
    fake_session.respond("PATCH", "/api/promotions/codes/9/toggle", {"ok": True})

    assert client.get("/promotions/5").status_code == 200
    assert client.get("/promotions/5").status_code == 200
    assert len(fake_session.calls_to("GET", "/api/promotions/5")) == 1

    resp = client.post("/promotions/5/codes/9/toggle")
    assert resp.status_code == 302

    assert len(fake_session.calls_to("PATCH", "/api/promotions/codes/9/toggle")) == 1

    client.get("/promotions/5")
    assert len(fake_session.calls_to("GET", "/api/promotions/5")) == 2


def test_detail_shows_discount_and_codes(client, fake_session):
    fake_session.respond("GET", "/api/promotions/5", PROMOTION)

    html = client.get("/promotions/5?amount=50").get_data(as_text=True)

    assert "20%" in html
    assert "SPRING20" in html
    assert "$10.00" in html


def test_unknown_promotion_redirects_with_error(client, fake_session, flashes):
    resp = client.get("/promotions/77")

    assert resp.status_code == 302
    assert ("danger", "Promotion not found") in flashes()


def test_create_promotion_validation_error_is_flashed(client, fake_session, flashes):
    resp = client.post("/promotions/new", data={"name": ""})

    assert resp.status_code == 302
    assert ("danger", "Name is required") in flashes()
    assert not fake_session.calls_to("POST", "/api/promotions")


def test_create_promotion_invalidates_list(client, fake_session, flashes):
    fake_session.respond("GET", "/api/promotions", [])
    fake_session.respond("POST", "/api/promotions", {"id": 6})

    client.get("/promotions")
    client.post("/promotions/new", data={"name": "Fall", "discount_value": "10"})
    assert ("success", "Promotion created successfully") in flashes()

    client.get("/promotions")
    assert len(fake_session.calls_to("GET", "/api/promotions")) == 2
