from juicelab.core.config import settings


def _register(client, email, name="User", password="secret123", referral_code=None):
    payload = {"email": email, "name": name, "password": password}
    if referral_code:
        payload["referral_code"] = referral_code
    return client.post("/auth/register", json=payload)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_register_and_login(client):
    r = _register(client, "api@example.com", "Api")
    assert r.status_code == 201
    body = r.json()
    assert body["email"] == "api@example.com"
    assert body["bonus_balance"] == 0
    assert len(body["referral_code"]) == 8
    assert "password_hash" not in body

    assert _register(client, "API@example.com").status_code == 409

    r = client.post("/auth/login", json={"email": "api@example.com", "password": "secret123"})
    assert r.status_code == 200
    assert r.json()["id"] == body["id"]

    r = client.post("/auth/login", json={"email": "api@example.com", "password": "wrong-pass"})
    assert r.status_code == 401
    r = client.post("/auth/login", json={"email": "ghost@example.com", "password": "secret123"})
    assert r.status_code == 401


def test_register_with_referral_code(client):
    a = _register(client, "a@example.com", "A").json()
    b = _register(client, "b@example.com", "B", referral_code=a["referral_code"]).json()
    assert b["referred_by"] == a["id"]
    assert b["bonus_balance"] == 10
    assert client.get(f"/users/{a['id']}").json()["bonus_balance"] == 10

    refs = client.get(f"/users/{a['id']}/referrals").json()
    assert [r["id"] for r in refs] == [b["id"]]

    r = client.get(f"/users/by-referral-code/{a['referral_code'].lower()}")
    assert r.status_code == 200
    assert r.json()["id"] == a["id"]


def test_referral_link(client):
    a = _register(client, "link@example.com").json()
    r = client.get(f"/users/{a['id']}/referral-link")
    assert r.status_code == 200
    assert r.json()["link"].endswith(f"/register?ref={a['referral_code']}")


def test_update_user(client):
    u = _register(client, "upd@example.com").json()
    r = client.patch(f"/users/{u['id']}", json={"city": "Одеса", "saved_delivery_method": "post"})
    assert r.status_code == 200
    assert r.json()["city"] == "Одеса"
    assert r.json()["saved_delivery_method"] == "post"

    # баланс через профиль не меняется
    r = client.patch(f"/users/{u['id']}", json={"bonus_balance": 999})
    assert r.status_code == 422

    assert client.patch("/users/missing", json={"name": "X"}).status_code == 404


def test_update_user_null_name_rejected(client):
    u = _register(client, "nullname@example.com").json()
    r = client.patch(f"/users/{u['id']}", json={"name": None})
    assert r.status_code == 422
    assert client.get(f"/users/{u['id']}").json()["name"] == u["name"]

    r = client.patch(f"/users/{u['id']}", json={"first_order_completed": True})
    assert r.status_code == 422


def test_admin_endpoints_require_token(client, admin_headers):
    u = _register(client, "adm@example.com").json()
    assert client.post(f"/bonuses/{u['id']}/credit", json={"amount": 5, "reason": "x"}).status_code == 403
    assert client.get("/users/").status_code == 403
    assert client.get("/users/", headers=admin_headers).status_code == 200


def test_admin_endpoints_closed_without_configured_token(client, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_TOKEN", "")
    assert client.get("/users/").status_code == 403
    assert client.get("/users/", headers={"X-Admin-Token": ""}).status_code == 403


def test_admin_credit_and_debit(client, admin_headers):
    u = _register(client, "bal@example.com").json()
    uid = u["id"]

    r = client.post(f"/bonuses/{uid}/credit", json={"amount": 40, "reason": "Компенсация"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["bonus_balance"] == 40

    r = client.post(f"/bonuses/{uid}/debit", json={"amount": 100, "reason": "too much"}, headers=admin_headers)
    assert r.status_code == 400

    r = client.post(f"/bonuses/{uid}/debit", json={"amount": 15, "reason": "Коррекция"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["bonus_balance"] == 25

    r = client.post(f"/bonuses/{uid}/credit", json={"amount": 0, "reason": "zero"}, headers=admin_headers)
    assert r.status_code == 422

    r = client.post("/bonuses/missing/credit", json={"amount": 5, "reason": "x"}, headers=admin_headers)
    assert r.status_code == 404

    history = client.get(f"/bonuses/{uid}/history").json()
    assert [(h["type"], h["amount"]) for h in history] == [("debit", 15), ("credit", 40)]


def test_quote(client):
    r = client.post("/bonuses/quote", json={"order_total": 350, "bonus_amount": 100})
    assert r.json() == {"max_bonus_payment": 35, "bonus_used": 35, "final_total": 315, "remaining_bonus": 65}


def test_order_flow(client, admin_headers):
    a = _register(client, "a@example.com", "A").json()
    b = _register(client, "b@example.com", "B", referral_code=a["referral_code"]).json()

    r = client.post("/orders/", json={"user_id": b["id"], "total": 200, "bonus_to_use": 10})
    assert r.status_code == 201
    order = r.json()
    assert order["bonus_used"] == 10
    assert order["status"] == "new"
    assert client.get(f"/users/{b['id']}").json()["bonus_balance"] == 0

    r = client.post(f"/orders/{order['id']}/status", json={"status": "completed"}, headers=admin_headers)
    assert r.status_code == 200
    assert [h["status"] for h in r.json()["status_history"]] == ["new", "completed"]

    assert client.get(f"/users/{b['id']}").json()["first_order_completed"] is True
    assert client.get(f"/users/{a['id']}").json()["bonus_balance"] == 20

    unlocked = [x["achievement_id"] for x in client.get(f"/achievements/{b['id']}").json()]
    assert unlocked == ["first_order"]

    level = client.get(f"/levels/{b['id']}").json()
    assert level["points"]["total_points"] == 30
    assert level["level"] == "silver"
    assert level["progress"]["next_level"] == "gold"
    assert level["level_info"]["name"]["ru"] == "Серебро"


def test_order_with_insufficient_bonus(client):
    u = _register(client, "poor@example.com").json()
    r = client.post("/orders/", json={"user_id": u["id"], "total": 200, "bonus_to_use": 5})
    assert r.status_code == 400
    assert client.get(f"/users/{u['id']}").json()["bonus_balance"] == 0


def test_guest_order(client):
    r = client.post("/orders/", json={"customer_name": "Гість", "total": 150})
    assert r.status_code == 201
    assert r.json()["user_id"] is None

    r = client.post("/orders/", json={"customer_name": "Гість", "total": 150, "bonus_to_use": 5})
    assert r.status_code == 400


def test_achievements_endpoints(client):
    assert len(client.get("/achievements").json()) == 9
    assert [a["id"] for a in client.get("/achievements", params={"rarity": "epic"}).json()] == [
        "spent_5000",
        "bonus_saver",
    ]

    u = _register(client, "ach@example.com").json()
    assert client.post(f"/achievements/{u['id']}/check").json() == {"unlocked": []}

    r = client.get(f"/achievements/{u['id']}/progress/ten_orders")
    assert r.json() == {"current": 0, "target": 10, "percentage": 0}
    assert client.get(f"/achievements/{u['id']}/progress/nope").status_code == 404
    assert client.get("/achievements/missing/progress/ten_orders").status_code == 404


def test_unknown_user_404(client):
    assert client.get("/users/missing").status_code == 404
    assert client.get("/levels/missing").status_code == 404
    assert client.get("/bonuses/missing/history").status_code == 404
