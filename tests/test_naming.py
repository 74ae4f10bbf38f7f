"""Tests for Go naming helpers."""
from gofactory.generators.go_gen.utils import to_go_name, to_go_var, to_snake_case


def test_to_snake_case():
    assert to_snake_case("CreatedAt") == "created_at"
    assert to_snake_case("userId") == "user_id"
    assert to_snake_case("first-name") == "first_name"


def test_to_go_name_uses_initialisms():
    assert to_go_name("id") == "ID"
    assert to_go_name("user_id") == "UserID"
    assert to_go_name("created_at") == "CreatedAt"
    assert to_go_name("avatarUrl") == "AvatarURL"


def test_to_go_var():
    assert to_go_var("User") == "user"
    assert to_go_var("first_name") == "firstName"
    assert to_go_var("OrderItem") == "orderItem"
    assert to_go_var("type") == "typeValue"
