import pytest

from juicelab.core.achievement_rules import (
    ACHIEVEMENTS,
    get_achievement_by_id,
    get_achievements_by_rarity,
    get_all_achievements,
)
from juicelab.core.level_rules import (
    calculate_user_points,
    get_level_info,
    get_level_progress,
    get_user_level,
)
from juicelab.services.bonus import calculate_max_bonus_payment, calculate_order_total_with_bonus


def test_points_formula():
    points = calculate_user_points(orders_count=2, total_spent=1205, referrals_count=3)
    assert points.orders_points == 20
    assert points.spending_points == 120
    assert points.referrals_points == 60
    assert points.total_points == 200


@pytest.mark.parametrize(
    "total, level",
    [(0, "silver"), (99, "silver"), (100, "gold"), (499, "gold"), (500, "platinum"), (10_000, "platinum")],
)
def test_level_thresholds(total, level):
    assert get_user_level(total) == level


def test_level_is_non_decreasing_in_points():
    order = {"silver": 0, "gold": 1, "platinum": 2}
    ranks = [order[get_user_level(p)] for p in range(0, 700)]
    assert ranks == sorted(ranks)


def test_level_progress_midway_to_gold():
    progress = get_level_progress(50, "silver")
    assert progress.current == 50
    assert progress.next == 100
    assert progress.percentage == 50
    assert progress.next_level == "gold"


def test_level_progress_gold_to_platinum():
    progress = get_level_progress(140, "gold")
    assert progress.next == 500
    assert progress.percentage == 10
    assert progress.next_level == "platinum"


def test_level_progress_top_tier():
    progress = get_level_progress(900, "platinum")
    assert progress.percentage == 100
    assert progress.next_level is None
    assert progress.next == 900


def test_level_info_is_bilingual():
    info = get_level_info("gold")
    assert info.total_points == 100
    assert info.name["uk"] == "Золото"
    assert info.benefits["ru"]


def test_achievement_table():
    assert len(get_all_achievements()) == 9
    assert set(ACHIEVEMENTS) == {
        "first_order",
        "five_referrals",
        "spent_1000",
        "spent_5000",
        "ten_orders",
        "vip_client",
        "active_referrer",
        "big_order",
        "bonus_saver",
    }
    assert get_achievement_by_id("big_order").condition_value == 500
    assert get_achievement_by_id("nope") is None
    assert {a.id for a in get_achievements_by_rarity("legendary")} == {"vip_client"}


def test_max_bonus_payment_is_ten_percent_floored():
    assert calculate_max_bonus_payment(200) == 20
    assert calculate_max_bonus_payment(199) == 19
    assert calculate_max_bonus_payment(5) == 0


def test_order_total_with_bonus_caps_usage():
    calc = calculate_order_total_with_bonus(200, 50)
    assert calc.bonus_used == 20
    assert calc.final_total == 180
    assert calc.remaining_bonus == 30

    calc = calculate_order_total_with_bonus(200, 7)
    assert calc.bonus_used == 7
    assert calc.final_total == 193
    assert calc.remaining_bonus == 0
