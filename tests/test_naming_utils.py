"""Unit tests for normalization helpers."""

from __future__ import annotations

import re

import pytest

from cfnaming.errors import InvalidInput
from cfnaming.utils.naming import (
    normalize_function_name,
    normalize_method_name,
    normalize_name,
    normalize_name_to_alpha_numeric_only,
    normalize_path,
    normalize_path_part,
)

SAMPLES = ["", "a", "myFunc", "MyFunc", "order-events", "with space", "_private", "9lives", "ünïcode"]


def test_normalize_name_uppercases_first_character_only():
    assert normalize_name("myFunc") == "MyFunc"
    assert normalize_name("my-func_name") == "My-func_name"
    assert normalize_name("") == ""


@pytest.mark.parametrize("name", SAMPLES)
def test_normalize_name_is_idempotent(name):
    assert normalize_name(normalize_name(name)) == normalize_name(name)


@pytest.mark.parametrize("value", [None, 42, b"bytes"])
def test_normalize_name_rejects_non_strings(value):
    with pytest.raises(InvalidInput):
        normalize_name(value)


@pytest.mark.parametrize("name", SAMPLES + ["my_bucket.name-1", "{id}/x", "!!!"])
def test_alpha_numeric_only_output(name):
    assert re.fullmatch(r"[0-9A-Za-z]*", normalize_name_to_alpha_numeric_only(name))


def test_alpha_numeric_only_strips_then_capitalizes():
    assert normalize_name_to_alpha_numeric_only("order-events") == "Orderevents"
    assert normalize_name_to_alpha_numeric_only("-order") == "Order"
    assert normalize_name_to_alpha_numeric_only("my_bucket.name-1") == "Mybucketname1"


def test_normalize_path_part_keeps_variable_name():
    assert normalize_path_part("{id}") == "IdVar"
    assert normalize_path_part("users") == "Users"
    assert normalize_path_part("USERS") == "Users"
    assert normalize_path_part("user-profile") == "UserDashprofile"
    assert normalize_path_part("") == ""


def test_normalize_path_concatenates_segments():
    assert normalize_path("users/{id}") == normalize_path_part("users") + normalize_path_part("{id}")
    assert normalize_path("users/{id}") == "UsersIdVar"
    assert normalize_path("/users") == "Users"
    assert normalize_path("users/{userId}/posts") == "UsersUseridVarPosts"


def test_normalize_function_name_spells_out_separators():
    assert normalize_function_name("my-func") == "MyDashfunc"
    assert normalize_function_name("my_func") == "MyUnderscorefunc"


@pytest.mark.parametrize(
    "hyphenated, underscored",
    [("a-b", "a_b"), ("-x", "_x"), ("send-mail_now", "send_mail_now"), ("x-", "x_")],
)
def test_hyphen_and_underscore_names_do_not_collide(hyphenated, underscored):
    assert normalize_function_name(hyphenated) != normalize_function_name(underscored)


def test_normalize_method_name():
    assert normalize_method_name("GET") == "Get"
    assert normalize_method_name("post") == "Post"
