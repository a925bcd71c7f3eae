import pytest

from juicelab.models import User
from juicelab.services import bonus, users


@pytest.fixture()
def user(db):
    return users.create_user(db, "ledger@example.com", "Ledger")


def test_credit_and_debit(db, user):
    assert bonus.add_bonus_to_user(db, user.id, 50, "Подарок") is True
    assert bonus.deduct_bonus_from_user(db, user.id, 20, "Оплата") is True
    db.refresh(user)
    assert user.bonus_balance == 30

    history = bonus.get_user_bonus_history(db, user.id)
    assert [(op.type, op.amount, op.reason) for op in history] == [
        ("credit", 50, "Подарок"),
        ("debit", 20, "Оплата"),
    ]


def test_debit_more_than_balance_is_noop(db, user):
    bonus.add_bonus_to_user(db, user.id, 5, "x")
    assert bonus.deduct_bonus_from_user(db, user.id, 6, "too much") is False
    db.refresh(user)
    assert user.bonus_balance == 5
    assert len(bonus.get_user_bonus_history(db, user.id)) == 1


def test_missing_user(db):
    assert bonus.add_bonus_to_user(db, "missing", 5, "x") is False
    assert bonus.deduct_bonus_from_user(db, "missing", 5, "x") is False
    assert bonus.get_user_bonus_history(db, "missing") == []


@pytest.mark.parametrize("amount", [0, -10])
def test_non_positive_credit_rejected(db, user, amount):
    with pytest.raises(ValueError):
        bonus.add_bonus_to_user(db, user.id, amount, "bad")
    db.refresh(user)
    assert user.bonus_balance == 0
    assert bonus.get_user_bonus_history(db, user.id) == []


def test_replayed_log_matches_balance(db, user):
    other = users.create_user(db, "other@example.com", "Other", referral_code=user.referral_code)
    bonus.add_bonus_to_user(db, user.id, 100, "a")
    bonus.deduct_bonus_from_user(db, user.id, 30, "b")
    bonus.deduct_bonus_from_user(db, user.id, 500, "rejected")
    bonus.deduct_bonus_from_user(db, other.id, 4, "c")

    for u in users.get_all_users(db):
        assert bonus.replay_balance(db, u.id) == u.bonus_balance
        assert u.bonus_balance >= 0

    db.refresh(user)
    assert user.bonus_balance == 10 + 100 - 30


def test_process_order_with_bonus_caps_at_ten_percent(db, user):
    bonus.add_bonus_to_user(db, user.id, 50, "x")
    result = bonus.process_order_with_bonus(db, user.id, "order-abcdef123456", 200, 50)
    assert result.success is True
    assert result.bonus_used == 20
    assert result.final_total == 180

    db.refresh(user)
    assert user.bonus_balance == 30
    assert bonus.get_user_bonus_history(db, user.id)[-1].reason == "Оплата заказа #123456"


def test_process_order_with_bonus_insufficient(db, user):
    bonus.add_bonus_to_user(db, user.id, 5, "x")
    result = bonus.process_order_with_bonus(db, user.id, "o1", 200, 10)
    assert result.success is False
    assert result.error == "insufficient_bonus"
    assert result.final_total == 200
    db.refresh(user)
    assert user.bonus_balance == 5


def test_process_order_with_bonus_unknown_user(db):
    result = bonus.process_order_with_bonus(db, "missing", "o1", 200, 10)
    assert result.success is False
    assert result.error == "user_not_found"


def test_referral_link(db, user):
    assert bonus.get_referral_link(db, user.id, "https://shop.example/") == (
        f"https://shop.example/register?ref={user.referral_code}"
    )
    assert bonus.get_referral_link(db, "missing") == ""


def test_concurrent_debits_cannot_overspend(db, session_factory, user):
    bonus.add_bonus_to_user(db, user.id, 10, "Подарок")

    first = session_factory()
    second = session_factory()
    try:
        # обе сессии видят один и тот же баланс до списания
        assert first.get(User, user.id).bonus_balance == 10
        assert second.get(User, user.id).bonus_balance == 10

        results = [
            bonus.deduct_bonus_from_user(first, user.id, 8, "Оплата заказа #1"),
            bonus.deduct_bonus_from_user(second, user.id, 8, "Оплата заказа #2"),
        ]
    finally:
        first.close()
        second.close()

    assert sorted(results) == [False, True]
    db.expire_all()
    assert db.get(User, user.id).bonus_balance == 2
    assert bonus.replay_balance(db, user.id) == 2
    assert [op.type for op in bonus.get_user_bonus_history(db, user.id)] == ["credit", "debit"]
